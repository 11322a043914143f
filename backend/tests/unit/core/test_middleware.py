"""
Unit Tests for request logging helpers
"""
import pytest

from eduverse.core.middleware import collection_from_path, should_skip_logging


class TestShouldSkipLogging:

    @pytest.mark.parametrize('path, expected', [
        ('/health', True),
        ('/api/health/ready', True),
        ('/docs', True),
        ('/api/assignments', False),
        ('/api/timetable', False),
    ])
    def test_paths(self, path, expected):
        assert should_skip_logging(path) is expected


class TestCollectionFromPath:

    @pytest.mark.parametrize('path, expected', [
        ('/api/notices', 'notices'),
        ('/api/timetable', 'timetable'),
        ('/api/health/ready', 'health'),
        ('/api/', None),
        ('/health', None),
    ])
    def test_paths(self, path, expected):
        assert collection_from_path(path) == expected
