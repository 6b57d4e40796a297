"""Document access evaluation.

Pure, synchronous functions resolving access with this precedence, first
match wins:

1. admins are allowed everything
2. the document owner (its uploader) is allowed everything
3. an explicit grant for the user on the document at or above the
   required level allows
4. otherwise deny
"""

import logging
from typing import Iterable, List, Mapping, Optional, Sequence

from ....core.exceptions import ForbiddenError
from ...documents.entities import Document
from ...users.entities import User, UserRole
from ..entities import DocumentPermission, PermissionType
from ..exceptions import InsufficientPermissionError

logger = logging.getLogger(__name__)


def is_admin(user: User) -> bool:
    return user.role is UserRole.ADMIN


def is_document_owner(document: Document, user: User) -> bool:
    return document.uploaded_by == user.id


def user_grants(
    user: User,
    document: Document,
    permissions: Iterable[DocumentPermission]
) -> List[DocumentPermission]:
    """Explicit grants held by ``user`` on ``document``.

    Records for other users or other documents are ignored, so callers can
    pass an unfiltered list.
    """
    return [
        p for p in permissions
        if p.user_id == user.id and p.document_id == document.id
    ]


def evaluate_access(
    user: User,
    document: Document,
    permissions: Iterable[DocumentPermission],
    required: PermissionType
) -> bool:
    if is_admin(user):
        return True
    if is_document_owner(document, user):
        return True
    return any(p.grants(required) for p in user_grants(user, document, permissions))


def require_permission(
    user: User,
    document: Document,
    permissions: Iterable[DocumentPermission],
    required: PermissionType
) -> None:
    """Raise InsufficientPermissionError unless ``user`` holds ``required``."""
    if not evaluate_access(user, document, permissions, required):
        logger.warning(
            f"Access denied: user {user.id} requires {required.value} on document {document.id}"
        )
        raise InsufficientPermissionError(
            user_id=user.id,
            document_id=document.id,
            required_permission=required
        )


def require_read_permission(
    user: User,
    document: Document,
    permissions: Iterable[DocumentPermission]
) -> None:
    require_permission(user, document, permissions, PermissionType.READ)


def require_write_permission(
    user: User,
    document: Document,
    permissions: Iterable[DocumentPermission]
) -> None:
    require_permission(user, document, permissions, PermissionType.WRITE)


def require_delete_permission(
    user: User,
    document: Document,
    permissions: Iterable[DocumentPermission]
) -> None:
    require_permission(user, document, permissions, PermissionType.DELETE)


def get_highest_permission(
    user: User,
    document: Document,
    permissions: Iterable[DocumentPermission]
) -> Optional[PermissionType]:
    """DELETE for admins and owners, else the best explicit grant, else None."""
    if is_admin(user) or is_document_owner(document, user):
        return PermissionType.highest()

    grants = user_grants(user, document, permissions)
    if not grants:
        return None
    return max((p.permission for p in grants), key=lambda p: p.level)


def can_manage_permissions(user: User, document: Document) -> bool:
    """Only admins and the owner may grant, update, revoke or list grants."""
    return is_admin(user) or is_document_owner(document, user)


def require_permission_manager(
    user: User,
    document: Document,
    action: str = "manage",
    resource: Optional[str] = None
) -> None:
    """Raise ForbiddenError unless ``user`` may manage grants on ``document``."""
    if not can_manage_permissions(user, document):
        logger.warning(f"User {user.id} may not {action} permissions on document {document.id}")
        raise ForbiddenError(
            message=f"Only document owner or admin can {action} permissions",
            resource=resource or f"Document:{document.id}"
        )


def filter_accessible_documents(
    user: User,
    documents: Sequence[Document],
    permissions_by_document: Mapping,
    required: PermissionType = PermissionType.READ
) -> List[Document]:
    """Keep the documents ``user`` may access at ``required``, preserving order.

    ``permissions_by_document`` maps a DocumentId to its grants; missing
    entries count as no grants.
    """
    return [
        document for document in documents
        if evaluate_access(user, document, permissions_by_document.get(document.id, ()), required)
    ]
