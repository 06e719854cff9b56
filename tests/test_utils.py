import pytest

from mortgage_calc.data_models import Region, currency_for_region
from mortgage_calc.utils import number_from_str, parse_amount, parse_rate


class TestParseAmount:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("250000", 250_000),
            ("250,000", 250_000),
            ("250k", 250_000),
            ("1.2m", 1_200_000),
            (" £1,400 ", 1400),
            ("$99.5", 99.5),
        ],
    )
    def test_valid(self, text, expected):
        assert parse_amount(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["", "abc", "12x", "k"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_amount(text)


class TestParseRate:
    def test_plain(self):
        assert parse_rate("4.5") == 4.5

    def test_percent_sign(self):
        assert parse_rate(" 4.5% ") == 4.5

    def test_invalid(self):
        with pytest.raises(ValueError, match="Invalid interest rate"):
            parse_rate("four")


class TestNumberFromStr:
    def test_commas(self):
        assert number_from_str("1,234.5") == 1234.5

    def test_invalid(self):
        with pytest.raises(ValueError):
            number_from_str("1.2.3")


class TestCurrencyForRegion:
    def test_presets(self):
        assert currency_for_region("UK").code == "GBP"
        assert currency_for_region("usa").code == "USD"
        assert currency_for_region(Region.EU).locale == "de-DE"

    def test_unknown_region_defaults_to_uk(self):
        assert currency_for_region("mars").symbol == "£"
