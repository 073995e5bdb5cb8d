import math

import pytest

from turtlesweep.errors import MeshValidationError, NonFiniteInputError, SweepError, check_num


def test_check_num_returns_float():
    assert check_num(3, "f") == 3.0
    assert isinstance(check_num(3, "f"), float)


def test_nan_message_names_command_and_value():
    with pytest.raises(NonFiniteInputError) as info:
        check_num(math.nan, "f")
    err = info.value
    assert err.command == "f"
    assert math.isnan(err.value)
    assert str(err) == "(f nan): expected a number, got NaN (bad arithmetic?)"


def test_infinity_and_non_numbers():
    with pytest.raises(NonFiniteInputError, match="got Infinity"):
        check_num(math.inf, "th")
    with pytest.raises(NonFiniteInputError, match="got str"):
        check_num("10", "tv")
    with pytest.raises(NonFiniteInputError, match="got bool"):
        check_num(True, "tr")


def test_error_hierarchy():
    assert issubclass(NonFiniteInputError, SweepError)
    assert issubclass(NonFiniteInputError, ValueError)
    assert issubclass(MeshValidationError, SweepError)
