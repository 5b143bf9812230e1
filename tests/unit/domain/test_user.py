from src.domain.user import is_valid_email, normalize_email


class TestEmail:

    def test_normalize(self):
        assert normalize_email("  Name@Example.COM ") == "name@example.com"
        assert normalize_email(None) == ""

    def test_valid(self):
        assert is_valid_email("billing@acme.test")

    def test_invalid(self):
        assert not is_valid_email("")
        assert not is_valid_email("acme.test")
        assert not is_valid_email("a b@acme.test")
        assert not is_valid_email("billing@acme")
