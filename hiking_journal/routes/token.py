from datetime import datetime
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from hiking_journal.dependencies import CurrentUser, get_session_user
from hiking_journal.services.token_service import TokenService

router = APIRouter(prefix="/tokens", tags=["Tokens"])


class TokenInfo(BaseModel):
    id: str
    scopes: List[str]
    created_at: datetime
    expires_at: datetime


class TokenCreateResponse(TokenInfo):
    """token 明文只會出現在這個回應"""
    token: str
    message: str = "API token generated successfully"


@router.post("", response_model=TokenCreateResponse, status_code=201)
async def create_token(user: CurrentUser = Depends(get_session_user)):
    """
    產生個人 API token

    外部整合方以 `Authorization: Bearer <token>` 讀取 activities
    """
    return await TokenService.create(user.user_id)


@router.get("", response_model=List[TokenInfo])
async def list_tokens(user: CurrentUser = Depends(get_session_user)):
    """列出自己的 API token（不含明文）"""
    return await TokenService.list_for_user(user.user_id)


@router.delete("/{token_id}", status_code=204)
async def revoke_token(token_id: str, user: CurrentUser = Depends(get_session_user)):
    """撤銷 API token"""
    revoked = await TokenService.revoke(token_id, user.user_id)
    if not revoked:
        raise HTTPException(status_code=404, detail="Token not found")
    return None
