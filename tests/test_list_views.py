import asyncio
from typing import List

import pytest

from course_admin.schemas.course_schemas import Course
from course_admin.schemas.response_schemas import OperationResult
from course_admin.utils.errors import NetworkError
from course_admin.views import (
    CoursesView,
    RegistrationsView,
    ResultsView,
    StudentsView,
    ViewState,
)


def _course(course_id: int, code: str) -> Course:
    return Course(id=course_id, title=f"Course {code}", code=code, credits=3, instructor="Dr. Who")


class SequencedCoursesApi:
    """Courses API double; each list call waits on its own event."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.events: List[asyncio.Event] = []

    async def list_courses(self):
        event = asyncio.Event()
        self.events.append(event)
        response = self.responses[len(self.events) - 1]
        await event.wait()
        return response


class TestLoading:
    """Test fetching the collection."""

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_mount_loads_items(self, api, seeded, notifier):
        view = StudentsView(api, notifier)

        await view.mount()

        assert view.state == ViewState.READY
        assert [s.name for s in view.items] == ["Alice Smith", "Bob Jones"]
        assert view.filtered == view.items
        assert view.result_summary == "2 students found"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_load_failure(self, notifier):
        api = SequencedCoursesApi(OperationResult.fail(NetworkError("Could not reach the server")))
        view = CoursesView(api, notifier)

        mounting = asyncio.create_task(view.mount())
        await asyncio.sleep(0)
        assert view.is_loading
        api.events[0].set()
        await mounting

        assert view.state == ViewState.ERROR
        assert view.items == []
        assert notifier.last.description == "Failed to load courses"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_response_after_unmount_is_ignored(self, notifier):
        api = SequencedCoursesApi(OperationResult.ok([_course(1, "CS101")]))
        view = CoursesView(api, notifier)

        mounting = asyncio.create_task(view.mount())
        await asyncio.sleep(0)
        view.unmount()
        api.events[0].set()
        await mounting

        assert view.items == []
        assert notifier.notifications == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_older_response_loses_to_newer(self, notifier):
        api = SequencedCoursesApi(
            OperationResult.ok([_course(1, "OLD100")]),
            OperationResult.ok([_course(1, "NEW100"), _course(2, "NEW200")]),
        )
        view = CoursesView(api, notifier)
        view.is_mounted = True

        first = asyncio.create_task(view.reload())
        await asyncio.sleep(0)
        second = asyncio.create_task(view.reload())
        await asyncio.sleep(0)

        api.events[1].set()
        await second
        api.events[0].set()
        await first

        assert [c.code for c in view.items] == ["NEW100", "NEW200"]


@pytest.mark.integration
class TestFiltering:
    """Test the case-insensitive search box."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "term,expected",
        [
            ("", ["Alice Smith", "Bob Jones"]),
            ("alice", ["Alice Smith"]),
            ("JONES", ["Bob Jones"]),
            ("s002", ["Bob Jones"]),
            ("uni.edu", ["Alice Smith", "Bob Jones"]),
            ("nobody", []),
        ],
    )
    async def test_student_search(self, api, seeded, notifier, term, expected):
        view = StudentsView(api, notifier)
        await view.mount()

        view.search_term = term

        assert [s.name for s in view.filtered] == expected

    @pytest.mark.asyncio
    async def test_course_search_fields(self, api, seeded, notifier):
        view = CoursesView(api, notifier)
        await view.mount()

        view.search_term = "cs1"
        assert [c.code for c in view.filtered] == ["CS101"]

        view.search_term = "noether"
        assert [c.code for c in view.filtered] == ["MATH201"]
        assert view.result_summary == "1 course found"

        view.search_term = "quantum"
        assert view.result_summary == "0 courses found"

    @pytest.mark.asyncio
    async def test_registration_search(self, api, seeded, notifier):
        view = RegistrationsView(api, notifier)
        await view.mount()

        view.search_term = "intro to"
        assert len(view.filtered) == 1

        view.search_term = "math201"
        assert view.filtered == []

    @pytest.mark.asyncio
    async def test_result_search_by_grade(self, api, seeded, notifier):
        view = ResultsView(api, notifier)
        await view.mount()

        view.search_term = "a"
        assert len(view.filtered) == 1

        view.search_term = "S002"
        assert view.filtered == []

    @pytest.mark.asyncio
    async def test_filter_survives_reload(self, api, store, seeded, notifier):
        view = StudentsView(api, notifier)
        await view.mount()
        view.search_term = "carol"
        assert view.filtered == []

        store.add_student("S003", "Carol White", "carol@uni.edu")
        await view.reload()

        assert [s.name for s in view.filtered] == ["Carol White"]


@pytest.mark.integration
class TestDelete:
    """Test deleting from a list."""

    @pytest.mark.asyncio
    async def test_delete_confirmed(self, api, store, seeded, notifier):
        prompts = []

        def confirm(message: str) -> bool:
            prompts.append(message)
            return True

        view = StudentsView(api, notifier, confirm)
        await view.mount()
        alice = view.items[0]

        assert await view.delete(alice)

        assert prompts == ["Are you sure you want to delete Alice Smith?"]
        assert alice.id not in store.students
        assert [s.name for s in view.items] == ["Bob Jones"]
        assert notifier.last.title == "Student deleted"
        assert notifier.last.description == "Alice Smith has been removed from the system"

    @pytest.mark.asyncio
    async def test_delete_declined(self, api, store, seeded, notifier):
        view = StudentsView(api, notifier, confirm=lambda message: False)
        await view.mount()

        assert not await view.delete(view.items[0])

        assert len(store.students) == 2
        assert notifier.notifications == []

    @pytest.mark.asyncio
    async def test_async_confirm(self, api, store, seeded, notifier):
        async def confirm(message: str) -> bool:
            return True

        view = CoursesView(api, notifier, confirm)
        await view.mount()

        assert await view.delete(view.items[1])

        assert [c.code for c in view.items] == ["CS101"]
        assert notifier.last.description == "Course deleted successfully"

    @pytest.mark.asyncio
    async def test_delete_twice(self, api, seeded, notifier):
        """Test deleting a record that is already gone reports a failure."""
        view = CoursesView(api, notifier)
        await view.mount()
        math = view.items[1]

        assert await view.delete(math)
        assert not await view.delete(math)

        assert notifier.last.is_error
        assert notifier.last.description == "Failed to delete course"
        assert [c.code for c in view.items] == ["CS101"]


@pytest.mark.integration
class TestFormsFromViews:
    """Test create and edit flows through a list view."""

    @pytest.mark.asyncio
    async def test_create_course_then_reload(self, api, store, notifier):
        """Test a created course appears with the id the backend assigned."""
        view = CoursesView(api, notifier)
        await view.mount()
        assert view.items == []

        form = await view.open_create_form()
        form.set_values(title="Intro to Programming", code="CS101", credits=3, instructor="Dr. Turing")
        assert await form.submit()

        assert len(view.items) == 1
        created = view.items[0]
        assert created.id in store.courses
        assert created.code == "CS101"
        assert notifier.last.description == "Course created successfully"

        view.search_term = "CS101"
        assert view.filtered == [created]
        assert view.result_summary == "1 course found"

    @pytest.mark.asyncio
    async def test_duplicate_code_keeps_form_open(self, api, seeded, notifier):
        view = CoursesView(api, notifier)
        await view.mount()

        form = await view.open_create_form()
        form.set_values(title="Another Intro", code="CS101", credits=3, instructor="Dr. Turing")

        assert not await form.submit()

        assert form.is_open
        assert form.field_errors == {"code": ["Course code already exists"]}
        assert len(view.items) == 2

    @pytest.mark.asyncio
    async def test_edit_student(self, api, store, seeded, notifier):
        view = StudentsView(api, notifier)
        await view.mount()

        form = await view.open_edit_form(view.items[1])
        assert form.values == {"name": "Bob Jones", "email": "bob@uni.edu"}
        form.set_value("name", "Robert Jones")
        assert await form.submit()

        assert store.students[seeded["bob"]["id"]]["name"] == "Robert Jones"
        assert [s.name for s in view.items] == ["Alice Smith", "Robert Jones"]

    @pytest.mark.asyncio
    async def test_unmount_closes_form(self, api, seeded, notifier):
        view = CoursesView(api, notifier)
        await view.mount()
        form = await view.open_create_form()

        view.unmount()

        assert not form.is_open
        assert view.active_form is None


@pytest.mark.unit
class TestGradeTone:
    @pytest.mark.parametrize(
        "grade,tone",
        [("A-", "green"), ("B+", "blue"), ("C", "yellow"), ("D", "orange"), ("F", "red"),
         ("E", "gray"), ("", "gray")],
    )
    def test_grade_tone(self, grade, tone):
        assert ResultsView.grade_tone(grade) == tone
