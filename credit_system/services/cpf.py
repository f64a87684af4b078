from __future__ import annotations

import re

CPF_LENGTH = 11
_NON_DIGITS = re.compile(r"\D")


def normalize_cpf(value: str) -> str:
    """Remove pontuação: "002.594.300-64" -> "00259430064"."""
    if not value:
        return ""
    return _NON_DIGITS.sub("", value)


def _check_digit(digits: list[int]) -> int:
    weight = len(digits) + 1
    total = sum(digit * (weight - index) for index, digit in enumerate(digits))
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


def is_valid_cpf(value: str) -> bool:
    cpf = normalize_cpf(value)
    if len(cpf) != CPF_LENGTH:
        return False
    # 000.000.000-00, 111.111.111-11 ... passam no cálculo mas são inválidos
    if cpf == cpf[0] * CPF_LENGTH:
        return False

    digits = [int(char) for char in cpf]
    first = _check_digit(digits[:9])
    second = _check_digit(digits[:9] + [first])
    return digits[9] == first and digits[10] == second
