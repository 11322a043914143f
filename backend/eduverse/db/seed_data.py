"""
Database Seed Data Module

Sample assignments, notices, resources, submissions and timetable entries
for local development and demos. Each table is seeded only when it is empty,
so running the seeder twice is harmless.

Run with: python -m eduverse.db.seed_data [--clear]
"""
import argparse
import asyncio
from typing import Any, Dict, List

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from eduverse.core.database import AsyncSessionLocal, close_db, init_db
from eduverse.core.logging_config import logger
from eduverse.core.types import iso_timestamp
from eduverse.services.schema_registry import EntityKind, EntitySchema, all_schemas, get_schema


# ==================== Sample Data Constants ====================

SAMPLE_NOTICES = [
    {
        "title": "Mid-Term Examination Schedule - Fall 2024",
        "content": "The mid-term examinations for Fall 2024 semester will commence from March 15, 2024. "
                   "Students must carry their valid ID cards and admit cards to the examination hall.",
        "author": "Admin Office",
        "authorRole": "admin",
        "department": "Admin",
        "priority": "high",
        "createdAt": "2024-03-01T09:00:00.000Z",
    },
    {
        "title": "Workshop on Artificial Intelligence and Machine Learning",
        "content": "The Computer Science Department is organizing a two-day workshop on AI/ML fundamentals "
                   "on March 20-21, 2024 in the Computer Lab. Register through the department portal.",
        "author": "Dr. Sarah Johnson",
        "authorRole": "faculty",
        "department": "Computer Science",
        "priority": "medium",
        "createdAt": "2024-03-03T10:30:00.000Z",
    },
    {
        "title": "Holiday Notice - Holi Festival",
        "content": "The institute will remain closed on March 25, 2024 on account of Holi festival. "
                   "Regular academic activities will resume from March 26, 2024.",
        "author": "Admin Office",
        "authorRole": "admin",
        "department": "Admin",
        "priority": "medium",
        "createdAt": "2024-03-05T11:15:00.000Z",
    },
    {
        "title": "Project Submission Deadline Extended",
        "content": "The final year project submission deadline has been extended to April 10, 2024. "
                   "No further extensions will be granted.",
        "author": "Prof. Robert Williams",
        "authorRole": "faculty",
        "department": "Computer Science",
        "priority": "high",
        "createdAt": "2024-03-07T14:00:00.000Z",
    },
    {
        "title": "Library Timings During Examinations",
        "content": "The central library will remain open from 8:00 AM to 10:00 PM during the examination period.",
        "author": "Admin Office",
        "authorRole": "admin",
        "department": "Admin",
        "priority": "low",
        "createdAt": "2024-03-08T08:45:00.000Z",
    },
]

SAMPLE_ASSIGNMENTS = [
    {
        "title": "Database Design Project - E-Commerce System",
        "description": "Design and implement a complete database schema for an e-commerce platform. "
                       "Include ER diagrams, normalization up to 3NF and sample queries.",
        "subject": "Database Management Systems",
        "facultyName": "Dr. Sarah Johnson",
        "dueDate": "2024-12-30T00:00:00.000Z",
        "totalMarks": 50,
        "department": "Computer Science",
        "year": 3,
        "createdAt": "2024-12-15T00:00:00.000Z",
    },
    {
        "title": "Network Protocol Implementation - TCP/IP Stack",
        "description": "Implement a simplified TCP/IP stack with packet creation, checksum calculation "
                       "and basic flow control. Demonstrate it with a client-server application.",
        "subject": "Computer Networks",
        "facultyName": "Prof. Robert Williams",
        "dueDate": "2025-01-08T00:00:00.000Z",
        "totalMarks": 100,
        "department": "Computer Science",
        "year": 4,
        "createdAt": "2024-12-16T00:00:00.000Z",
    },
    {
        "title": "Data Structures Assignment 3 - Binary Trees and AVL Trees",
        "description": "Implement and analyze binary search trees and AVL trees, including insertion, "
                       "deletion and traversal, with a complexity comparison.",
        "subject": "Data Structures",
        "facultyName": "Dr. Michael Chen",
        "dueDate": "2024-12-28T00:00:00.000Z",
        "totalMarks": 40,
        "department": "Computer Science",
        "year": 2,
        "createdAt": "2024-12-14T00:00:00.000Z",
    },
    {
        "title": "Thermodynamics Problem Set",
        "description": "Solve the problem set on the first and second laws of thermodynamics.",
        "subject": "Thermodynamics",
        "facultyName": "Dr. Emily Davis",
        "dueDate": "2025-01-03T00:00:00.000Z",
        "totalMarks": 30,
        "department": "Mechanical",
        "year": 2,
        "createdAt": "2024-12-17T00:00:00.000Z",
    },
]

SAMPLE_RESOURCES = [
    {
        "title": "DBMS Lecture Notes - Chapter 5: Normalization",
        "type": "pdf",
        "subject": "DBMS",
        "uploadedBy": "Dr. Michael Chen",
        "uploadDate": "2024-12-15T00:00:00.000Z",
        "url": "/resources/dbms-chapter5-normalization.pdf",
        "department": "Computer Science",
        "createdAt": "2024-12-15T00:00:00.000Z",
    },
    {
        "title": "Binary Search Tree Implementation Tutorial",
        "type": "video",
        "subject": "Data Structures",
        "uploadedBy": "Dr. Sarah Johnson",
        "uploadDate": "2024-12-18T00:00:00.000Z",
        "url": "https://youtube.com/watch?v=pYT9F8_LFTM",
        "department": "Computer Science",
        "createdAt": "2024-12-18T00:00:00.000Z",
    },
    {
        "title": "React.js Official Documentation - Hooks Guide",
        "type": "link",
        "subject": "Web Development",
        "uploadedBy": "Prof. Robert Williams",
        "uploadDate": "2024-12-20T00:00:00.000Z",
        "url": "https://react.dev/reference/react/hooks",
        "department": "Computer Science",
        "createdAt": "2024-12-20T00:00:00.000Z",
    },
    {
        "title": "Network Protocols Reference Sheet - TCP/IP Suite",
        "type": "pdf",
        "subject": "Computer Networks",
        "uploadedBy": "Dr. Emily Davis",
        "uploadDate": "2024-12-22T00:00:00.000Z",
        "url": "/resources/network-protocols-tcpip.pdf",
        "department": "Computer Science",
        "createdAt": "2024-12-22T00:00:00.000Z",
    },
    {
        "title": "Operating Systems Lab Manual",
        "type": "document",
        "subject": "Operating Systems",
        "uploadedBy": "Prof. James Miller",
        "uploadDate": "2024-12-10T00:00:00.000Z",
        "url": "/resources/os-lab-manual.docx",
        "department": "Computer Science",
        "createdAt": "2024-12-10T00:00:00.000Z",
    },
]

SAMPLE_SUBMISSIONS = [
    {
        "assignmentId": 1,
        "studentId": "STU001",
        "studentName": "Rahul Sharma",
        "submittedDate": "2024-01-18T14:30:00.000Z",
        "fileUrl": "/uploads/assignments/rahul_dbms_assignment.pdf",
        "grade": 85,
        "feedback": "Good work, well-structured database design. Consider adding more examples for BCNF.",
        "status": "graded",
        "createdAt": "2024-01-18T14:30:00.000Z",
    },
    {
        "assignmentId": 2,
        "studentId": "STU002",
        "studentName": "Priya Patel",
        "submittedDate": "2024-01-19T10:15:00.000Z",
        "fileUrl": "/uploads/assignments/priya_dsa_project.zip",
        "grade": None,
        "feedback": None,
        "status": "submitted",
        "createdAt": "2024-01-19T10:15:00.000Z",
    },
    {
        "assignmentId": 3,
        "studentId": "STU003",
        "studentName": "Arjun Reddy",
        "submittedDate": "2024-01-21T09:45:00.000Z",
        "fileUrl": "/uploads/assignments/arjun_web_dev_assignment.pdf",
        "grade": None,
        "feedback": None,
        "status": "submitted",
        "createdAt": "2024-01-21T09:45:00.000Z",
    },
    {
        "assignmentId": 1,
        "studentId": "STU004",
        "studentName": "Sneha Reddy",
        "submittedDate": "2024-01-25T23:10:00.000Z",
        "fileUrl": None,
        "grade": None,
        "feedback": None,
        "status": "late",
        "createdAt": "2024-01-25T23:10:00.000Z",
    },
]

_SLOTS = [
    ("Monday", "9:00 AM - 10:00 AM", "Data Structures", "Dr. Sarah Johnson", "CS-101", "lecture"),
    ("Monday", "10:00 AM - 11:00 AM", "DBMS", "Dr. Michael Chen", "CS-102", "lecture"),
    ("Monday", "11:00 AM - 12:00 PM", "Computer Networks", "Prof. Robert Williams", "CS-103", "tutorial"),
    ("Monday", "2:00 PM - 5:00 PM", "Web Development", "Dr. Emily Davis", "CS-Lab-1", "lab"),
    ("Tuesday", "9:00 AM - 10:00 AM", "Operating Systems", "Prof. James Miller", "CS-101", "lecture"),
    ("Tuesday", "10:00 AM - 11:00 AM", "Software Engineering", "Dr. Sarah Johnson", "CS-102", "lecture"),
    ("Tuesday", "2:00 PM - 5:00 PM", "DBMS", "Dr. Michael Chen", "CS-Lab-2", "lab"),
    ("Wednesday", "9:00 AM - 10:00 AM", "Computer Networks", "Prof. Robert Williams", "CS-103", "lecture"),
    ("Wednesday", "11:00 AM - 12:00 PM", "Data Structures", "Dr. Sarah Johnson", "CS-101", "tutorial"),
    ("Thursday", "9:00 AM - 10:00 AM", "Web Development", "Dr. Emily Davis", "CS-102", "lecture"),
    ("Thursday", "2:00 PM - 5:00 PM", "Operating Systems", "Prof. James Miller", "CS-Lab-1", "lab"),
    ("Friday", "10:00 AM - 11:00 AM", "Software Engineering", "Dr. Sarah Johnson", "CS-101", "tutorial"),
]

SAMPLE_TIMETABLE = [
    {"day": day, "time": time, "subject": subject, "faculty": faculty, "room": room, "type": session_type}
    for day, time, subject, faculty, room, session_type in _SLOTS
]

SAMPLE_DATA: Dict[EntityKind, List[Dict[str, Any]]] = {
    EntityKind.NOTICE: SAMPLE_NOTICES,
    EntityKind.ASSIGNMENT: SAMPLE_ASSIGNMENTS,
    EntityKind.RESOURCE: SAMPLE_RESOURCES,
    EntityKind.SUBMISSION: SAMPLE_SUBMISSIONS,
    EntityKind.TIMETABLE_ENTRY: SAMPLE_TIMETABLE,
}


# ==================== Seed Functions ====================

def build_row(schema: EntitySchema, data: Dict[str, Any]) -> Any:
    """Wire-keyed sample dict -> ORM instance"""
    columns = {spec.column: data.get(spec.name) for spec in schema.fields}
    columns["created_at"] = data.get("createdAt") or iso_timestamp()
    return schema.model(**columns)


async def count_rows(db: AsyncSession, schema: EntitySchema) -> int:
    result = await db.execute(select(func.count()).select_from(schema.model))
    return result.scalar_one()


async def seed_table(db: AsyncSession, kind: EntityKind) -> int:
    """Insert sample rows for one entity kind when its table is empty"""
    schema = get_schema(kind)
    existing = await count_rows(db, schema)
    if existing:
        logger.info(f"[Seed] {schema.collection}: {existing} rows present, skipping")
        return 0

    rows = [build_row(schema, data) for data in SAMPLE_DATA[kind]]
    db.add_all(rows)
    await db.flush()
    logger.info(f"[Seed] {schema.collection}: created {len(rows)} rows")
    return len(rows)


async def seed_all() -> Dict[str, int]:
    """Seed every empty table; returns rows created per collection"""
    logger.info("Starting database seeding...")
    await init_db()

    created: Dict[str, int] = {}
    async with AsyncSessionLocal() as db:
        try:
            for schema in all_schemas():
                created[schema.collection] = await seed_table(db, schema.kind)
            await db.commit()
        except Exception as e:
            await db.rollback()
            logger.error(f"Error seeding database: {e}")
            raise

    logger.info(f"Database seeding completed: {created}")
    return created


async def clear_all() -> None:
    """Delete all rows from every portal table"""
    logger.info("Clearing all data...")
    await init_db()
    async with AsyncSessionLocal() as db:
        for schema in all_schemas():
            await db.execute(delete(schema.model))
        await db.commit()
    logger.info("All data cleared!")


async def _run(clear: bool) -> None:
    try:
        if clear:
            await clear_all()
        await seed_all()
    finally:
        await close_db()


def main(argv: List[str] = None) -> None:
    parser = argparse.ArgumentParser(description="Seed the portal database with sample data")
    parser.add_argument("--clear", action="store_true", help="delete all rows before seeding")
    args = parser.parse_args(argv)
    asyncio.run(_run(args.clear))


if __name__ == "__main__":
    main()
