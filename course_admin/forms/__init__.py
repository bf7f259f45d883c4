from .base_form import *
from .student_form import *
from .course_form import *
from .registration_form import *
from .result_form import *

__all__ = [
    "EntityForm",
    "FormMode",
    "StudentForm",
    "CourseForm",
    "RegistrationForm",
    "ResultForm",
]
