from .base_list_view import *
from .students import *
from .courses import *
from .registrations import *
from .results import *
from .dashboard import *

__all__ = [
    "EntityListView",
    "ViewState",
    "StudentsView",
    "CoursesView",
    "RegistrationsView",
    "ResultsView",
    "Dashboard",
]
