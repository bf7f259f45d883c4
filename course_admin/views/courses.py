from typing import List, Optional

from course_admin.forms.course_form import CourseForm
from course_admin.schemas.course_schemas import Course
from course_admin.views.base_list_view import EntityListView


class CoursesView(EntityListView[Course]):
    entity_label = "Course"
    plural_label = "courses"

    async def fetch(self):
        return await self.api.list_courses()

    async def create(self, request):
        return await self.api.create_course(request)

    async def update(self, item_id: int, request):
        return await self.api.update_course(item_id, request)

    async def remove(self, item_id: int):
        return await self.api.delete_course(item_id)

    def build_form(self, record: Optional[Course]) -> CourseForm:
        return CourseForm(self._submit_handler(record), self.notifier, record)

    def search_values(self, item: Course) -> List[Optional[str]]:
        return [item.title, item.code, item.instructor]

    def delete_prompt(self, item: Course) -> str:
        return f"Are you sure you want to delete {item.title} ({item.code})?"
