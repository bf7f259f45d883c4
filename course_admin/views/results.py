from typing import List, Optional

from course_admin.forms.result_form import ResultForm
from course_admin.schemas.result_schemas import GRADE_TONES, Grade, Result
from course_admin.views.base_list_view import EntityListView


class ResultsView(EntityListView[Result]):
    entity_label = "Result"
    plural_label = "results"

    async def fetch(self):
        return await self.api.list_results()

    async def create(self, request):
        return await self.api.create_result(request)

    async def update(self, item_id: int, request):
        return await self.api.update_result(item_id, request)

    async def remove(self, item_id: int):
        return await self.api.delete_result(item_id)

    def build_form(self, record: Optional[Result]) -> ResultForm:
        return ResultForm(self.api, self._submit_handler(record), self.notifier, record)

    def search_values(self, item: Result) -> List[Optional[str]]:
        return [item.student_number, item.course_code, item.course_name, item.grade.value]

    def delete_prompt(self, item: Result) -> str:
        return (
            f"Are you sure you want to delete the result for "
            f"{item.student_number} in {item.course_code}?"
        )

    @staticmethod
    def grade_tone(grade: str) -> str:
        """Badge colour for a grade; unknown grades get a neutral grey."""
        try:
            return Grade(grade).tone
        except ValueError:
            return GRADE_TONES.get(grade[:1], "gray") if grade else "gray"
