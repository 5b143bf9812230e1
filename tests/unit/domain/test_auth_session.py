from datetime import datetime, timedelta, timezone

from src.domain.auth_session import AuthSession
from src.domain.base import as_utc, utc_now


class TestUtcTimestamps:

    def test_utc_now_is_timezone_aware(self):
        now = utc_now()

        assert now.tzinfo is not None
        assert now.utcoffset() == timedelta(0)

    def test_as_utc_reads_naive_values_as_utc(self):
        stored = datetime(2024, 5, 1, 12, 0)

        assert as_utc(stored) == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def test_as_utc_converts_other_offsets(self):
        local = datetime(2024, 5, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))

        assert as_utc(local) == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class TestAuthSessionExpiry:

    def test_not_expired_before_expiry(self):
        auth_session = AuthSession(token="tok", user_id=3, expires_at=utc_now() + timedelta(hours=1))

        assert not auth_session.is_expired()

    def test_expired_at_expiry(self):
        expires_at = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        auth_session = AuthSession(token="tok", user_id=3, expires_at=expires_at)

        assert auth_session.is_expired(now=expires_at)

    def test_naive_stored_expiry_compares_with_aware_now(self):
        """
        Given: expires_at read back from a database column without timezone
        When: Expiry is checked against an aware clock
        Then: The naive value counts as UTC instead of raising TypeError
        """
        auth_session = AuthSession(token="tok", user_id=3, expires_at=datetime(2024, 5, 1, 12, 0))

        assert not auth_session.is_expired(now=datetime(2024, 5, 1, 11, 59, tzinfo=timezone.utc))
        assert auth_session.is_expired(now=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc))
