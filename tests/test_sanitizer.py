import pytest

from weathergate.errors import ValidationError
from weathergate.services.sanitizer import sanitize_location


class TestSanitizeLocation:
    def test_plain_city_unchanged(self):
        assert sanitize_location("London") == "London"

    def test_keeps_allowed_punctuation(self):
        assert sanitize_location("St. John's, Newfoundland-Labrador") == "St. John's, Newfoundland-Labrador"

    def test_keeps_accented_letters(self):
        assert sanitize_location("São Paulo") == "São Paulo"
        assert sanitize_location("Zürich") == "Zürich"

    def test_strips_disallowed_characters(self):
        assert sanitize_location("Paris<script>alert(1)</script>") == "Parisscriptalert1script"
        assert sanitize_location("Berlin; DROP TABLE") == "Berlin DROP TABLE"
        assert sanitize_location("Paris×÷") == "Paris"
        assert sanitize_location("3×4 ÷ 2") == "34  2"

    def test_keeps_letters_next_to_excluded_signs(self):
        # Ö, Ø, ö and ø sit right beside × and ÷ in Latin-1
        assert sanitize_location("Øresund Köö") == "Øresund Köö"

    def test_trims_whitespace(self):
        assert sanitize_location("   Oslo  ") == "Oslo"

    def test_trims_whitespace_left_by_stripping(self):
        assert sanitize_location("@@ Rome !!") == "Rome"

    @pytest.mark.parametrize("raw", [None, "", "   ", "\t\n"])
    def test_missing(self, raw):
        with pytest.raises(ValidationError, match="required"):
            sanitize_location(raw)

    def test_too_long(self):
        with pytest.raises(ValidationError, match="too long"):
            sanitize_location("a" * 101)

    def test_exactly_max_length_accepted(self):
        assert sanitize_location("a" * 100) == "a" * 100

    def test_length_checked_before_stripping(self):
        # Would sanitize down to "Lima", but the raw input is over the limit.
        with pytest.raises(ValidationError, match="too long"):
            sanitize_location("Lima" + "$" * 100)

    def test_only_disallowed_characters(self):
        with pytest.raises(ValidationError, match="invalid"):
            sanitize_location("<<>>$$%%")

    def test_error_status_is_400(self):
        with pytest.raises(ValidationError) as exc_info:
            sanitize_location("")
        assert exc_info.value.status_code == 400

    @pytest.mark.parametrize(
        "raw",
        ["London", "  New   York ", "Köln!!", "a<b>c", "O'Hare, IL.", " -- ", "東京 Tokyo", "x​y"],
    )
    def test_idempotent(self, raw):
        once = sanitize_location(raw)
        assert sanitize_location(once) == once
