from church_admin.client.api import AdminClient, UploadBatchResult, UploadProgress
from church_admin.client.errors import ApiError, BatchOperationError, SessionExpiredError
from church_admin.client.query import MemberQuery
from church_admin.client.session import AdminSession

__all__ = [
    "AdminClient",
    "AdminSession",
    "ApiError",
    "BatchOperationError",
    "MemberQuery",
    "SessionExpiredError",
    "UploadBatchResult",
    "UploadProgress",
]
