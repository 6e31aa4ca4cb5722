import pytest

from core.validators import is_valid_cpf, normalize_cpf

VALID_CPFS = ["52998224725", "11144477735", "12345678909"]


@pytest.mark.parametrize("cpf", VALID_CPFS)
def test_valid_cpf_is_accepted(cpf):
    assert is_valid_cpf(cpf) is True


@pytest.mark.parametrize("cpf", VALID_CPFS)
def test_tampered_check_digits_are_rejected(cpf):
    for position in (9, 10):
        for digit in "0123456789":
            if digit == cpf[position]:
                continue
            tampered = cpf[:position] + digit + cpf[position + 1:]
            assert is_valid_cpf(tampered) is False, tampered


def test_punctuation_is_ignored():
    assert is_valid_cpf("529.982.247-25") is True
    assert normalize_cpf("529.982.247-25") == "52998224725"


@pytest.mark.parametrize(
    "value",
    ["", "5299822472", "529982247250", "529.982.247-2", "abc", "52998224725 1"],
)
def test_wrong_length_is_rejected(value):
    assert is_valid_cpf(value) is False


@pytest.mark.parametrize("digit", "0123456789")
def test_repeated_digit_sequences_are_rejected(digit):
    assert is_valid_cpf(digit * 11) is False


@pytest.mark.parametrize("value", [None, 52998224725, ["52998224725"]])
def test_non_string_values_are_rejected(value):
    assert is_valid_cpf(value) is False
