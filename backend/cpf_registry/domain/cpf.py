"""CPF (Cadastro de Pessoas Físicas) checksum validation.

Format: 11 digits, the last two being check digits.
Example: 48472338088

Algorithm:
- First check digit: sum of the first 9 digits weighted 10..2
- Second check digit: sum of the first 10 digits weighted 11..2
- Each expected digit is ((sum * 10) % 11) % 10
"""

from ..core.constants import ValidationLimits


class CpfValidator:
    """Pure CPF format and checksum validator.

    The input is expected to be digits only; stripping punctuation and
    whitespace is the caller's job (see UserValidator.validate_cpf).
    """

    LENGTH = ValidationLimits.CPF_LENGTH
    CHECK_DIGITS = ValidationLimits.CPF_CHECK_DIGITS

    @classmethod
    def is_valid(cls, candidate: str) -> bool:
        """Validate a digits-only CPF.

        Args:
            candidate: 11-character numeric string

        Returns:
            True if the length, non-degenerate sequence and both check digits are valid

        Examples:
            >>> CpfValidator.is_valid("48472338088")
            True
            >>> CpfValidator.is_valid("11111111111")
            False
        """
        if not isinstance(candidate, str) or len(candidate) != cls.LENGTH:
            return False

        # Degenerate sequences are rejected before any checksum math
        if candidate == candidate[0] * cls.LENGTH:
            return False

        if not candidate.isascii() or not candidate.isdigit():
            return False

        digits = [int(char) for char in candidate]

        for position in range(cls.LENGTH - cls.CHECK_DIGITS, cls.LENGTH):
            weighted_sum = sum(
                digits[index] * ((position + 1) - index)
                for index in range(position)
            )
            expected = ((weighted_sum * 10) % 11) % 10
            if digits[position] != expected:
                return False

        return True

    @classmethod
    def format(cls, cpf: str) -> str:
        """Render a digits-only CPF as XXX.XXX.XXX-XX.

        Values that are not 11 characters long are returned unchanged.

        Examples:
            >>> CpfValidator.format("48472338088")
            "484.723.380-88"
        """
        if not cpf or len(cpf) != cls.LENGTH:
            return cpf
        return f"{cpf[:3]}.{cpf[3:6]}.{cpf[6:9]}-{cpf[9:]}"
