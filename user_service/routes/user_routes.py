import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from user_service.auth.passwords import hash_password
from user_service.core.responses import EnvelopeResponse, success_envelope
from user_service.database import get_db
from user_service.models.user import User

router = APIRouter(tags=['users'])

logger = logging.getLogger(__name__)


class CreateUserRequest(BaseModel):
    username: str = Field(min_length=1)
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UpdateUserRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


def find_user_by_username(username: str, db: Session) -> User | None:
    # Lowest id wins should the table ever hold duplicate usernames.
    return (
        db.query(User)
        .filter(User.username == username)
        .order_by(User.id)
        .first()
    )


def describe_user(user: User) -> str:
    return f'User found id: {user.id} with email {user.email}'


@router.post('/users', response_model=EnvelopeResponse)
def create_user(payload: CreateUserRequest, db: Session = Depends(get_db)):
    user = User(
        username=payload.username,
        email=payload.email,
        password_hash=hash_password(payload.password),
    )

    try:
        db.add(user)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to insert user %s', payload.username)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail='Failed to create user',
        ) from exc

    logger.info('Created user %s', payload.username)
    return success_envelope('User created')


@router.api_route('/users/', methods=['GET', 'PUT'], include_in_schema=False)
def missing_username():
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail='Username is required',
    )


@router.get('/users/{username}', response_model=EnvelopeResponse)
def get_user(username: str, db: Session = Depends(get_db)):
    if not username:
        missing_username()

    try:
        user = find_user_by_username(username, db)
    except SQLAlchemyError as exc:
        logger.exception('Failed to query user %s', username)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail='Failed to query user',
        ) from exc

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='User not found',
        )

    return success_envelope(describe_user(user))


@router.put('/users/{username}', response_model=EnvelopeResponse)
def update_user(username: str, payload: UpdateUserRequest, db: Session = Depends(get_db)):
    if not username:
        missing_username()

    password_hash = hash_password(payload.password)

    try:
        user = find_user_by_username(username, db)
        if user is None:
            db.rollback()
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail='User not found',
            )
        user.email = payload.email
        user.password_hash = password_hash
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to update user %s', username)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail='Failed to update user',
        ) from exc

    logger.info('Updated user %s', username)
    return success_envelope('User updated')
