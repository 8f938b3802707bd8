"""Fixtures for catalog tests."""

import pytest

from classroom.core.models import Course
from classroom.core.store import Table


@pytest.fixture
def make_course(store, subject):
    """Factory for courses in the empty store."""

    def _make(title="Course", grade_level=5, subject_id=None, featured=False):
        return store.create(
            Table.COURSES,
            Course(
                title=title,
                subject_id=subject_id or subject.id,
                grade_level=grade_level,
                featured=featured,
            ),
        )

    return _make
