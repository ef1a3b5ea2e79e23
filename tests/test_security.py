from datetime import timedelta

from jose import jwt

from app.core.config import settings
from app.core.security import create_access_token, decode_token, hash_password, verify_password

def test_password_hash_roundtrip():
    hashed = hash_password("s3cret-pass")

    assert hashed != "s3cret-pass"
    assert verify_password("s3cret-pass", hashed)
    assert not verify_password("wrong-pass", hashed)

def test_verify_password_with_corrupt_hash_is_false():
    assert verify_password("anything", "not-a-bcrypt-hash") is False

def test_token_carries_user_id():
    token = create_access_token({"sub": "17"})

    assert decode_token(token) == 17

def test_expired_token_is_rejected():
    token = create_access_token({"sub": "17"}, expires_delta=timedelta(seconds=-5))

    assert decode_token(token) is None

def test_token_signed_with_other_key_is_rejected():
    token = jwt.encode({"sub": "17"}, "some-other-key", algorithm=settings.ALGORITHM)

    assert decode_token(token) is None

def test_non_numeric_subject_is_rejected():
    assert decode_token(create_access_token({"sub": "alice"})) is None
