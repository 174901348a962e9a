# homehelp/modules/credentials/router.py

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import joinedload

from homehelp.core.database import get_db, utc_now
from homehelp.modules.auth.security import get_current_admin_user, require_roles
from homehelp.modules.providers import service as provider_service
from homehelp.modules.providers.schemas import CredentialPublic
from homehelp.shared.models.user_models import User
from homehelp.shared.models.provider_models import Credential
from . import schemas

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Credentials"],
    responses={404: {"description": "Not found"}},
)


@router.post(
    "/credentials",
    response_model=CredentialPublic,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a credential for verification"
)
async def create_credential(
    credential_data: schemas.CredentialCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_roles("provider"))
):
    """
    (Provider) Attach a document to the caller's own provider profile.
    """
    profile = await provider_service.get_profile_by_user(db, current_user.uid)
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User has no provider profile"
        )

    credential = Credential(
        provider_id=profile.uid,
        document_name=credential_data.document_name,
        document_url=credential_data.document_url,
    )
    db.add(credential)
    await db.commit()

    return credential


@router.patch(
    "/credentials/{credential_uid}/verify",
    response_model=CredentialPublic,
    summary="Verify or un-verify a credential"
)
async def verify_credential(
    credential_uid: str,
    verify_data: schemas.CredentialVerify,
    db: AsyncSession = Depends(get_db),
    admin_user: User = Depends(get_current_admin_user)
):
    """
    (Admin Only) A verified credential also marks its provider as verified.
    """
    query = (
        select(Credential)
        .where(Credential.uid == credential_uid)
        .options(joinedload(Credential.provider))
    )
    credential = (await db.execute(query)).scalars().first()
    if not credential:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Credential not found")

    credential.is_verified = verify_data.is_verified
    credential.verified_at = utc_now() if verify_data.is_verified else None
    if verify_data.is_verified:
        credential.provider.is_verified = True

    db.add(credential)
    await db.commit()

    logger.info("Credential %s verified=%s by %s", credential.uid, credential.is_verified, admin_user.uid)
    return credential
