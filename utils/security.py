"""
utils/security.py

- 관리자 비밀번호 해시/검증 (werkzeug.security)
- 관리자 토큰 발급/검증: "<admin_id>.<만료 epoch>.<HMAC-SHA256 서명>"
"""

import hashlib
import hmac
import time
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from config.settings import settings


def hash_password(raw_password: str) -> str:
    return generate_password_hash(raw_password)


def verify_password(raw_password: str, password_hash: str) -> bool:
    # 해시 형식이 깨져 있으면 werkzeug가 ValueError를 던지므로 불일치로 처리
    try:
        return check_password_hash(password_hash, raw_password)
    except ValueError:
        return False


def _sign(payload: str) -> str:
    return hmac.new(settings.SECRET_KEY.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).hexdigest()


def create_admin_token(admin_id: int, ttl_minutes: Optional[int] = None, now: Optional[float] = None) -> str:
    ttl = settings.ADMIN_TOKEN_TTL_MINUTES if ttl_minutes is None else ttl_minutes
    expires_at = int((now if now is not None else time.time()) + ttl * 60)
    payload = f"{admin_id}.{expires_at}"
    return f"{payload}.{_sign(payload)}"


def verify_admin_token(token: str, now: Optional[float] = None) -> Optional[int]:
    """유효하면 admin_id, 형식 오류/서명 불일치/만료면 None"""
    try:
        admin_id, expires_at, signature = token.strip().split(".")
        admin_id_num, expires_num = int(admin_id), int(expires_at)
    except ValueError:
        return None

    # 타이밍 안전 비교
    if not hmac.compare_digest(signature, _sign(f"{admin_id}.{expires_at}")):
        return None
    if expires_num < (now if now is not None else time.time()):
        return None
    return admin_id_num
