import base64
import json
import logging
import time
from typing import Optional

import httpx
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.x509 import load_pem_x509_certificate
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import FIREBASE_CERTS_URL, FIREBASE_PROJECT_ID
from .domain.identity.schemas import SessionInfo

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

# Cache for Google's public certificates, keyed by kid
_cached_keys: Optional[dict] = None

# Allowed clock skew for iat checks
CLOCK_SKEW_SECONDS = 60


def _b64decode(segment: str) -> bytes:
    padding_len = -len(segment) % 4
    return base64.urlsafe_b64decode(segment + "=" * padding_len)


async def get_google_public_keys(force_refresh: bool = False) -> Optional[dict]:
    """Fetch the x509 certificates Firebase signs ID tokens with"""
    global _cached_keys
    if _cached_keys and not force_refresh:
        logger.debug("✅ Using cached Google public keys")
        return _cached_keys

    try:
        async with httpx.AsyncClient(timeout=10.0) as client:
            response = await client.get(FIREBASE_CERTS_URL)
        if response.status_code == 200:
            _cached_keys = response.json()
            logger.info(f"✅ Fetched {len(_cached_keys)} Google public keys")
            return _cached_keys
        logger.error(f"❌ Failed to fetch Google public keys: HTTP {response.status_code}")
    except httpx.HTTPError as e:
        logger.error(f"❌ Error fetching Google public keys: {e}")
    return None


def check_claims(claims: dict, project_id: str, now: Optional[float] = None) -> None:
    """Validate audience, issuer and timing claims of a decoded ID token"""
    now = time.time() if now is None else now

    if claims.get("aud") != project_id:
        logger.error("❌ Token audience mismatch")
        raise HTTPException(status_code=401, detail="Invalid token audience")

    if claims.get("iss") != f"https://securetoken.google.com/{project_id}":
        logger.error("❌ Token issuer mismatch")
        raise HTTPException(status_code=401, detail="Invalid token issuer")

    exp = claims.get("exp")
    if not isinstance(exp, (int, float)) or exp < now:
        raise HTTPException(
            status_code=401,
            detail="Token has expired. Please refresh your session.",
            headers={"X-Token-Expired": "true"},
        )

    iat = claims.get("iat", 0)
    if not isinstance(iat, (int, float)) or iat > now + CLOCK_SKEW_SECONDS:
        logger.warning("⚠️ Token issued in the future")
        raise HTTPException(status_code=401, detail="Invalid token")

    if not claims.get("sub"):
        raise HTTPException(status_code=401, detail="Invalid token claims")


async def verify_firebase_token(token: str) -> dict:
    """
    Verify a Firebase ID token and return its claims.

    The RS256 signature is checked against Google's published certificates
    before any claim is trusted.
    """
    if not FIREBASE_PROJECT_ID:
        logger.error("❌ FIREBASE_PROJECT_ID not configured")
        raise HTTPException(status_code=500, detail="Authentication provider not configured")

    parts = token.split(".")
    if len(parts) != 3:
        raise HTTPException(status_code=401, detail="Invalid token format. Expected a valid JWT token.")
    header_b64, payload_b64, signature_b64 = parts

    try:
        header = json.loads(_b64decode(header_b64))
        claims = json.loads(_b64decode(payload_b64))
        signature = _b64decode(signature_b64)
    except (ValueError, TypeError) as e:
        logger.error(f"❌ Failed to decode token: {e}")
        raise HTTPException(status_code=401, detail="Invalid token") from e

    if not isinstance(header, dict) or not isinstance(claims, dict):
        logger.error("❌ Token header or payload is not a JSON object")
        raise HTTPException(status_code=401, detail="Invalid token")

    kid = header.get("kid")
    if header.get("alg") != "RS256" or not isinstance(kid, str) or not kid:
        logger.error(f"❌ Invalid token header: alg={header.get('alg')}, kid={kid}")
        raise HTTPException(status_code=401, detail="Invalid token header")

    public_keys = await get_google_public_keys()
    if not public_keys or kid not in public_keys:
        logger.warning(f"⚠️ Key ID {kid} not found in public keys, refreshing")
        public_keys = await get_google_public_keys(force_refresh=True)
        if not public_keys or kid not in public_keys:
            raise HTTPException(status_code=401, detail="Unable to verify token signature")

    try:
        cert = load_pem_x509_certificate(public_keys[kid].encode())
    except (ValueError, AttributeError) as e:
        logger.error(f"❌ Unusable certificate for key ID {kid}: {e}")
        raise HTTPException(status_code=401, detail="Unable to verify token signature") from e

    try:
        cert.public_key().verify(
            signature,
            f"{header_b64}.{payload_b64}".encode(),
            padding.PKCS1v15(),
            hashes.SHA256(),
        )
    except (InvalidSignature, TypeError) as e:
        logger.error("❌ Token signature verification failed")
        raise HTTPException(status_code=401, detail="Invalid token signature") from e

    check_claims(claims, FIREBASE_PROJECT_ID)
    return claims


def session_from_claims(claims: dict) -> SessionInfo:
    return SessionInfo(
        account_id=claims["sub"],
        email=claims.get("email"),
        name=claims.get("name") or None,
    )


async def get_session_info(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[SessionInfo]:
    """Return the current session, or None when the request carries no token"""
    if not credentials:
        return None

    token = credentials.credentials.strip()
    logger.info(f"🔍 Authentication attempt - Token length: {len(token)}")

    claims = await verify_firebase_token(token)
    session = session_from_claims(claims)
    logger.debug(f"✅ Session verified for account {session.account_id}")
    return session
