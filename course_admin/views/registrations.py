from typing import List, Optional

from course_admin.forms.registration_form import RegistrationForm
from course_admin.schemas.registration_schemas import Registration
from course_admin.views.base_list_view import EntityListView


class RegistrationsView(EntityListView[Registration]):
    entity_label = "Registration"
    plural_label = "registrations"

    async def fetch(self):
        return await self.api.list_registrations()

    async def create(self, request):
        return await self.api.create_registration(request)

    async def update(self, item_id: int, request):
        return await self.api.update_registration(item_id, request)

    async def remove(self, item_id: int):
        return await self.api.delete_registration(item_id)

    def build_form(self, record: Optional[Registration]) -> RegistrationForm:
        return RegistrationForm(
            self.api, self._submit_handler(record), self.notifier, record
        )

    def search_values(self, item: Registration) -> List[Optional[str]]:
        return [
            item.student.name,
            item.student.student_number,
            item.course.title,
            item.course.code,
        ]

    def delete_prompt(self, item: Registration) -> str:
        return (
            f"Are you sure you want to delete the registration of "
            f"{item.student.name} for {item.course.code}?"
        )
