"""
테스트 설정 및 공용 fixture
"""
import os

# 테스트 환경 설정 (config 모듈 import 전에)
os.environ['DATABASE_URL'] = 'sqlite://'
os.environ['PLAN_AUTOSAVE_DELAY_MS'] = '800'
os.environ['SELF_STUDY_MAJOR_MATCH'] = 'exact'
os.environ['ACTIVITY_ACTOR_NAME'] = '테스트관리자'

import pytest

from config import load_settings
from database import Database
from models import Course, Student, Subject


class _ScheduledTask:
    def __init__(self, due_ms, callback):
        self.due_ms = due_ms
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """시계를 직접 움직이는 스케줄러 (밀리초 단위)"""

    def __init__(self):
        self.now_ms = 0
        self.tasks = []

    def schedule(self, delay_seconds, callback):
        task = _ScheduledTask(self.now_ms + int(round(delay_seconds * 1000)), callback)
        self.tasks.append(task)
        return task

    @property
    def pending(self):
        return [t for t in self.tasks if not t.cancelled]

    def advance(self, ms):
        """ms 만큼 시간을 진행하고 기한이 된 콜백 실행"""
        self.now_ms += ms
        due = [t for t in self.pending if t.due_ms <= self.now_ms]
        self.tasks = [t for t in self.pending if t.due_ms > self.now_ms]
        for task in sorted(due, key=lambda t: t.due_ms):
            task.callback()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def settings():
    return load_settings()


@pytest.fixture
def db():
    """테스트마다 새 in-memory SQLite 데이터베이스"""
    database = Database('sqlite://')
    assert database.create_tables()
    return database


@pytest.fixture
def session(db):
    s = db.get_session()
    yield s
    s.close()


@pytest.fixture
def make_student(session):
    """학생 생성 factory (과정은 이름으로 만들어 연결)"""
    def _make(name='홍길동', education_level='고졸', desired_degree='없음',
              course_name='사회복지사2급(신법)', major=None, class_start=None):
        course = None
        if course_name:
            course = Course(name=course_name)
            session.add(course)
        student = Student(
            name=name,
            education_level=education_level,
            desired_degree=desired_degree,
            major=major,
            class_start=class_start,
            course=course,
        )
        session.add(student)
        session.commit()
        return student
    return _make


@pytest.fixture
def make_subjects(session):
    """공용 과목 일괄 생성 factory"""
    def _make(count, category='전공', credits=3, subject_type=None, prefix='과목'):
        subjects = [
            Subject(
                category=category,
                name=f"{prefix}{i}",
                credits=credits,
                type='이론',
                subject_type=subject_type,
            )
            for i in range(1, count + 1)
        ]
        session.add_all(subjects)
        session.commit()
        return subjects
    return _make
