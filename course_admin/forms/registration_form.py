from datetime import date
from typing import Any, Dict

from course_admin.forms.reference_data import StudentCourseSelectForm
from course_admin.schemas.form_schemas import RegistrationFormSchema
from course_admin.schemas.registration_schemas import Registration, RegistrationRequest
from course_admin.utils.datetime_utils import to_iso_string


class RegistrationForm(StudentCourseSelectForm[Registration, RegistrationFormSchema]):
    entity_label = "Registration"
    schema = RegistrationFormSchema

    def default_values(self) -> Dict[str, Any]:
        if self.record is None:
            return {"studentId": "", "courseId": "", "registrationDate": date.today()}
        return {
            "studentId": str(self.record.student.id),
            "courseId": str(self.record.course.id),
            "registrationDate": self.record.registered_on or date.today(),
        }

    def to_request(self, data: RegistrationFormSchema) -> RegistrationRequest:
        return RegistrationRequest(
            student_id=data.student_id,
            course_id=data.course_id,
            registration_date=to_iso_string(data.registration_date),
        )
