"""业务流程"""
from .bookmark_form import BookmarkFormData, BookmarkFormService, SubmitOutcome, check_form
from .dashboard import DashboardService

__all__ = [
    "BookmarkFormData", "BookmarkFormService", "SubmitOutcome", "check_form",
    "DashboardService",
]
