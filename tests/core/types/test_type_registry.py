"""
Tests for codecs and the TypeRegistry.
"""
import pytest
from datetime import date, datetime, time
from decimal import Decimal

from tablefilter.config import ConfigManager
from tablefilter.core.domain import ParseError
from tablefilter.core.types import (
    BooleanCodec,
    DateCodec,
    DateTimeCodec,
    DecimalCodec,
    DerivedOrdering,
    FloatCodec,
    FunctionCodec,
    IntegerCodec,
    StringCodec,
    TimeCodec,
    TypeRegistry,
    create_default_registry,
    is_temporal,
    natural_ordering,
)


class TestCodecs:
    """Tests for the built-in codecs."""

    @pytest.mark.parametrize("codec, value", [
        (IntegerCodec(), 42),
        (FloatCodec(), 2.5),
        (DecimalCodec(), Decimal("10.25")),
        (BooleanCodec(), True),
        (DateCodec(), date(2024, 2, 29)),
        (DateTimeCodec(), datetime(2024, 2, 29, 13, 45, 10)),
        (TimeCodec(), time(8, 30)),
        (StringCodec(), "text"),
    ])
    def test_format_then_parse(self, codec, value):
        assert codec.parse(codec.format(value)) == value

    def test_none_formats_empty(self):
        assert IntegerCodec().format(None) == ""
        assert DateCodec().format(None) == ""

    def test_integer_error_offset(self):
        with pytest.raises(ParseError) as excinfo:
            IntegerCodec().parse("12a4")
        assert excinfo.value.offset == 2

    @pytest.mark.parametrize("text, offset", [("1.5", 1), ("2e3", 1), ("-7E", 2)])
    def test_integer_error_offset_on_float_syntax(self, text, offset):
        with pytest.raises(ParseError) as excinfo:
            IntegerCodec().parse(text)
        assert excinfo.value.offset == offset

    def test_float_error_offset(self):
        with pytest.raises(ParseError) as excinfo:
            FloatCodec().parse("1.5x")
        assert excinfo.value.offset == 3

    def test_boolean_is_case_insensitive(self):
        assert BooleanCodec().parse("TRUE") is True
        assert BooleanCodec().parse(" false ") is False

    def test_boolean_rejects_other_text(self):
        with pytest.raises(ParseError):
            BooleanCodec().parse("yes")

    def test_date_trailing_text_offset(self):
        with pytest.raises(ParseError) as excinfo:
            DateCodec().parse("2024-01-01xyz")
        assert excinfo.value.offset == 10

    def test_custom_date_pattern(self):
        assert DateCodec("%d/%m/%Y").parse("15/01/2020") == date(2020, 1, 15)

    def test_function_codec_wraps_errors(self):
        codec = FunctionCodec(lambda text: {"one": 1}[text], lambda value: "one")
        assert codec.parse("one") == 1
        assert codec.format(1) == "one"
        with pytest.raises(ParseError):
            codec.parse("two")


class TestTypeRegistry:
    """Tests for TypeRegistry lookups and updates."""

    def test_string_codec_always_present(self):
        registry = TypeRegistry()
        assert isinstance(registry.get_codec(str), StringCodec)
        registry.set_codec(str, None)
        assert isinstance(registry.get_codec(str), StringCodec)

    def test_unknown_type_not_configured(self):
        registry = TypeRegistry.default()
        assert registry.get_codec(complex) is None
        assert registry.get_ordering(complex) is None

    def test_default_codecs(self, registry):
        for semantic_type in (bool, int, float, Decimal, date, datetime, time):
            assert registry.get_codec(semantic_type) is not None

    def test_numeric_orderings(self, registry):
        assert registry.get_ordering(int) is natural_ordering
        assert registry.is_orderable(float)

    def test_no_ordering_for_strings(self, registry):
        assert registry.get_ordering(str) is None
        assert not registry.is_orderable(str)

    def test_lookup_follows_mro(self, registry):
        class Age(int):
            pass
        assert registry.get_codec(Age) is registry.get_codec(int)

    def test_temporal_types_get_derived_ordering(self, registry):
        assert isinstance(registry.get_ordering(date), DerivedOrdering)

    def test_codec_change_rederives_ordering(self, registry):
        """A coarser format makes values equal once formatted."""
        registry.set_codec(datetime, DateTimeCodec("%Y-%m-%d"))
        ordering = registry.get_ordering(datetime)
        assert ordering(datetime(2024, 1, 1, 8), datetime(2024, 1, 1, 20)) == 0
        assert ordering(datetime(2024, 1, 1), datetime(2024, 1, 2)) < 0

    def test_explicit_ordering_survives_codec_change(self, registry):
        registry.set_ordering(date, natural_ordering)
        registry.set_codec(date, DateCodec("%d/%m/%Y"))
        assert registry.get_ordering(date) is natural_ordering

    def test_removing_temporal_ordering_restores_derived(self, registry):
        registry.set_ordering(date, natural_ordering)
        registry.set_ordering(date, None)
        assert isinstance(registry.get_ordering(date), DerivedOrdering)

    def test_removing_codec(self, registry):
        registry.set_codec(date, None)
        assert registry.get_codec(date) is None
        assert registry.get_ordering(date) is None

    def test_copy_is_independent(self, registry):
        clone = registry.copy()
        clone.set_codec(int, None)
        assert registry.get_codec(int) is not None

    def test_is_temporal(self):
        assert is_temporal(date)
        assert is_temporal(datetime)
        assert not is_temporal(int)
        assert not is_temporal("date")


class TestCreateDefaultRegistry:
    """Tests for the configuration-driven factory."""

    def test_without_config(self):
        assert create_default_registry().get_codec(int) is not None

    def test_formats_from_config(self):
        config = ConfigManager()
        config.set('PARSER', 'DATE_FORMAT', '%d.%m.%Y')
        registry = create_default_registry(config)
        assert registry.get_codec(date).parse("31.12.2023") == date(2023, 12, 31)
