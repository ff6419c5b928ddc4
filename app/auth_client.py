"""
Thin async client for the hosted auth platform (GoTrue REST API).

Sign-up, sign-in, sign-out, metadata updates and password recovery are
delegated to the platform; tokens it issues are verified locally in
app.utils.token_utils.
"""
from typing import Optional

import httpx
from fastapi import HTTPException

from app import config


def _headers(access_token: Optional[str] = None) -> dict:
    if not config.SUPABASE_URL or not config.SUPABASE_ANON_KEY:
        raise HTTPException(
            status_code=500,
            detail="Auth platform is not configured"
        )
    headers = {"apikey": config.SUPABASE_ANON_KEY, "Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    return headers


def _error_message(res: httpx.Response) -> str:
    try:
        data = res.json()
    except ValueError:
        return res.text or f"Auth platform error ({res.status_code})"
    if isinstance(data, dict):
        for key in ("msg", "error_description", "message", "error"):
            if data.get(key):
                return str(data[key])
    return f"Auth platform error ({res.status_code})"


async def _request(method: str, path: str, *, json: Optional[dict] = None,
                   params: Optional[dict] = None, access_token: Optional[str] = None) -> dict:
    url = f"{config.SUPABASE_URL}/auth/v1{path}"
    headers = _headers(access_token)
    try:
        async with httpx.AsyncClient(timeout=config.AUTH_HTTP_TIMEOUT) as client:
            res = await client.request(method, url, json=json, params=params, headers=headers)
    except httpx.HTTPError as e:
        print(f"[auth] {method} {path} failed: {e!r}")
        raise HTTPException(
            status_code=502,
            detail="Auth platform request failed"
        )

    if res.status_code >= 400:
        # platform 5xx is our upstream failure, 4xx is the caller's
        status_code = 502 if res.status_code >= 500 else res.status_code
        raise HTTPException(status_code=status_code, detail=_error_message(res))

    if res.status_code == 204 or not res.content:
        return {}
    return res.json()


async def sign_up(email: str, password: str, metadata: dict) -> dict:
    """
    Returns the platform user object. When email confirmation is off the
    platform answers with a session wrapping the user; both shapes collapse
    to the user here.
    """
    data = await _request("POST", "/signup", json={
        "email": email,
        "password": password,
        "data": metadata,
    })
    return data.get("user") or data


async def sign_in(email: str, password: str) -> dict:
    return await _request(
        "POST", "/token",
        params={"grant_type": "password"},
        json={"email": email, "password": password},
    )


async def sign_out(access_token: str) -> None:
    await _request("POST", "/logout", access_token=access_token)


async def update_user(access_token: str, data: dict) -> dict:
    return await _request("PUT", "/user", json={"data": data}, access_token=access_token)


async def reset_password(email: str, redirect_to: Optional[str] = None) -> None:
    params = {"redirect_to": redirect_to} if redirect_to else None
    await _request("POST", "/recover", json={"email": email}, params=params)
