import logging
import bcrypt
from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from jose import jwt
from app.core.config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES

logger = logging.getLogger(__name__)

# bcrypt hard limit
MAX_PASSWORD_BYTES = 72

# passlib is only used to verify legacy hashes; new hashes go through bcrypt directly
try:
    pwd_context = CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
    )
    logger.debug("Password context initialized")
except Exception as e:
    logger.warning(f"Failed to initialize passlib context: {e}, using bcrypt directly")
    pwd_context = None


def _password_bytes(password: str) -> bytes:
    """Encode a password and cut it to the bcrypt limit on a character boundary."""
    password_bytes = password.encode("utf-8")
    if len(password_bytes) <= MAX_PASSWORD_BYTES:
        return password_bytes

    logger.warning("Password exceeds 72 bytes, truncating before hashing (validation should have caught this)")
    truncated = password_bytes[:MAX_PASSWORD_BYTES]
    # Drop a partial multi-byte character left at the cut
    return truncated.decode("utf-8", errors="ignore").encode("utf-8")


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password (max 72 bytes in UTF-8)

    Returns:
        Hashed password string (bcrypt format compatible with passlib)

    Raises:
        ValueError: If password cannot be hashed
    """
    try:
        return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")
    except Exception as e:
        logger.error(f"Password hashing failed: {e}", exc_info=True)
        raise ValueError("Invalid password") from e


def verify_password(password: str, hashed: str) -> bool:
    """
    Verify a password against its hash.

    Supports both bcrypt-native hashes and passlib-wrapped hashes.
    """
    if not hashed:
        return False
    try:
        try:
            return bcrypt.checkpw(_password_bytes(password), hashed.encode("utf-8"))
        except (ValueError, TypeError):
            if pwd_context:
                return pwd_context.verify(password, hashed)
            return False
    except Exception as e:
        logger.error(f"Password verification failed: {e}", exc_info=True)
        return False


def create_access_token(data: dict, expires_delta: timedelta = None):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
