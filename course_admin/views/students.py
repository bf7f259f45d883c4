from typing import List, Optional

from course_admin.forms.student_form import StudentForm
from course_admin.schemas.student_schemas import Student
from course_admin.utils.notifications import Notification
from course_admin.views.base_list_view import EntityListView


class StudentsView(EntityListView[Student]):
    entity_label = "Student"
    plural_label = "students"

    async def fetch(self):
        return await self.api.list_students()

    async def create(self, request):
        return await self.api.create_student(request)

    async def update(self, item_id: int, request):
        return await self.api.update_student(item_id, request)

    async def remove(self, item_id: int):
        return await self.api.delete_student(item_id)

    def build_form(self, record: Optional[Student]) -> StudentForm:
        return StudentForm(self._submit_handler(record), self.notifier, record)

    def search_values(self, item: Student) -> List[Optional[str]]:
        return [item.name, item.email, item.student_number]

    def delete_prompt(self, item: Student) -> str:
        return f"Are you sure you want to delete {item.name}?"

    def deleted_notification(self, item: Student) -> Notification:
        return Notification.success(
            "Student deleted", f"{item.name} has been removed from the system"
        )
