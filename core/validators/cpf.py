"""
CPF (Cadastro de Pessoas Físicas) validation.

A CPF has nine base digits followed by two check digits, each computed as a
weighted sum modulo 11 over the digits before it.
"""

import re
from typing import Any

_NON_DIGITS = re.compile(r"\D")

CPF_LENGTH = 11


def normalize_cpf(value: str) -> str:
    """Strip everything but digits (``"529.982.247-25"`` -> ``"52998224725"``)."""
    return _NON_DIGITS.sub("", value)


def _check_digit(digits: str) -> int:
    weight = len(digits) + 1
    total = sum(int(digit) * (weight - index) for index, digit in enumerate(digits))
    remainder = total * 10 % 11
    return 0 if remainder == 10 else remainder


def is_valid_cpf(value: Any) -> bool:
    """
    Check whether ``value`` is a structurally valid CPF.

    Punctuation is ignored. Values that do not reduce to exactly 11 digits,
    sequences of one repeated digit and values with wrong check digits are
    rejected.
    """
    if not isinstance(value, str):
        return False

    cpf = normalize_cpf(value)
    if len(cpf) != CPF_LENGTH or len(set(cpf)) == 1:
        return False

    first = _check_digit(cpf[:9])
    if first != int(cpf[9]):
        return False

    second = _check_digit(cpf[:10])
    return second == int(cpf[10])
