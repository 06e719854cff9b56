import pytest

from mortgage_calc.formatter import currency_code, format_currency, format_years, print_summary
from mortgage_calc.engine import simulate


class TestCurrencyCode:
    @pytest.mark.parametrize("symbol, code", [("£", "GBP"), ("€", "EUR"), ("$", "USD"), ("¥", "USD")])
    def test_symbol_mapping(self, symbol, code):
        assert currency_code(symbol) == code


class TestFormatCurrency:
    def test_pounds(self, gbp):
        assert format_currency(1234.5, gbp) == "£1,235"

    def test_no_fraction_digits(self, gbp):
        assert format_currency(1389.58, gbp) == "£1,390"
        assert format_currency(0.4, gbp) == "£0"

    def test_euros_in_germany(self, eur):
        assert format_currency(1234567.89, eur) == "1.234.568 €"

    def test_dollars(self):
        assert format_currency(416874.33, {"locale": "en-US", "symbol": "$"}) == "$416,874"

    def test_negative(self, gbp):
        assert format_currency(-1500, gbp) == "-£1,500"

    def test_unknown_symbol_is_dollars(self):
        assert format_currency(100, {"locale": "en-US", "symbol": "¥"}) == "$100"

    def test_unknown_locale_uses_default_layout(self):
        assert format_currency(2500, {"locale": "ja-JP", "symbol": "€"}) == "€2,500"

    def test_underscore_locale(self):
        assert format_currency(2500, {"locale": "de_DE", "symbol": "€"}) == "2.500 €"


class TestFormatYears:
    def test_finite(self):
        assert format_years(25.04) == "25.0 years"

    def test_infinite(self):
        assert format_years(999) == "never"


class TestPrintSummary:
    def test_prints_headline_figures(self, capsys, gbp):
        print_summary(simulate(250_000, 4.5, 25, 0), gbp)
        out = capsys.readouterr().out
        assert "£250,000" in out
        assert "£1,390" in out
        assert "300 months" in out
        assert "Not paid off" not in out

    def test_flags_truncated_schedule(self, capsys, gbp):
        print_summary(simulate(250_000, 4.5, 25, -1000), gbp)
        assert "Not paid off" in capsys.readouterr().out
