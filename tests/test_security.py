# /tests/test_security.py

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

from lab_allocation.core import security


def _issue(expires_delta=None):
    token = security.create_access_token("labadmin", expires_delta=expires_delta)["access_token"]
    return token, security.decode_access_token(token)


def test_revoked_token_no_longer_decodes():
    token, payload = _issue()
    assert payload["sub"] == "labadmin"

    security.revoke_token(payload)

    assert security.decode_access_token(token) is None


def test_concurrent_sign_outs_revoke_every_token():
    issued = [_issue() for _ in range(50)]
    # An already expired entry forces pruning while other threads are revoking.
    security._revoked_tokens["stale"] = datetime.now(timezone.utc) - timedelta(minutes=1)

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda item: security.revoke_token(item[1]), issued))
        results = list(pool.map(lambda item: security.decode_access_token(item[0]), issued))

    assert results == [None] * len(issued)
    assert "stale" not in security._revoked_tokens
    assert all(payload["jti"] in security._revoked_tokens for _, payload in issued)


def test_tampered_token_is_rejected():
    token, _ = _issue()
    assert security.decode_access_token(token + "x") is None
