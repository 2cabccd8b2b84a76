# devicehub/dependencies.py
"""
Explicit wiring of the repository graph for each request.

    roles, subscribers        (no references)
    users       -> subscribers, roles
    devices     -> subscribers
    assignments -> users, devices

Every repository shares the request-scoped Session yielded by get_session.
"""
from fastapi import Depends
from sqlmodel import Session

from devicehub.core.config import get_settings
from devicehub.core.security import CredentialService, get_credential_service
from devicehub.database import get_session
from devicehub.repositories.assignment_repo import AssignmentRepository
from devicehub.repositories.device_repo import DeviceRepository
from devicehub.repositories.role_repo import RoleRepository
from devicehub.repositories.subscriber_repo import SubscriberRepository
from devicehub.repositories.user_repo import UserRepository
from devicehub.services.auth_service import AuthService


def get_role_repo(session: Session = Depends(get_session)) -> RoleRepository:
    return RoleRepository(session)


def get_subscriber_repo(session: Session = Depends(get_session)) -> SubscriberRepository:
    return SubscriberRepository(session)


def get_user_repo(
    session: Session = Depends(get_session),
    subscribers: SubscriberRepository = Depends(get_subscriber_repo),
    roles: RoleRepository = Depends(get_role_repo),
    credentials: CredentialService = Depends(get_credential_service),
) -> UserRepository:
    return UserRepository(session, subscribers, roles, credentials)


def get_device_repo(
    session: Session = Depends(get_session),
    subscribers: SubscriberRepository = Depends(get_subscriber_repo),
) -> DeviceRepository:
    return DeviceRepository(session, subscribers)


def get_assignment_repo(
    session: Session = Depends(get_session),
    users: UserRepository = Depends(get_user_repo),
    devices: DeviceRepository = Depends(get_device_repo),
) -> AssignmentRepository:
    return AssignmentRepository(session, users, devices)


def get_auth_service(
    users: UserRepository = Depends(get_user_repo),
    credentials: CredentialService = Depends(get_credential_service),
) -> AuthService:
    return AuthService(
        users,
        credentials,
        reveal_unknown_user=get_settings().LOGIN_REVEALS_UNKNOWN_USER,
    )
