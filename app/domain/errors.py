# app/domain/errors.py
"""
Typowane bledy domeny sklepu.

Kazdy blad ma stabilny ``code`` i czytelny komunikat. Zadne szczegoly
bazy (tresc zapytan, stack) nie przechodza przez granice serwisu.
"""


class CommerceError(Exception):
    code = "error"
    default_message = "Blad operacji"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(CommerceError, ValueError):
    """Niepoprawne dane od klienta, nigdy nie ponawiac."""

    code = "validation_error"
    default_message = "Niepoprawne dane"


class NotFoundError(CommerceError, LookupError):
    """Brak zasobu albo koszyk nieaktywny."""

    code = "not_found"
    default_message = "Nie znaleziono"


class AuthorizationError(CommerceError, PermissionError):
    """Zasob nalezy do kogos innego, nie zdradzamy czy istnieje."""

    code = "forbidden"
    default_message = "Brak dostepu"


class UnauthenticatedError(AuthorizationError):
    code = "unauthenticated"
    default_message = "Wymagane logowanie"


class ConflictError(CommerceError):
    """Timeout blokady albo naruszenie ograniczenia, mozna powtorzyc cala operacje."""

    code = "conflict"
    default_message = "Konflikt wspolbieznosci, sprobuj ponownie"


class TransientStoreError(CommerceError):
    """Problem z polaczeniem do bazy/redisa, powtarzac z backoffem."""

    code = "store_unavailable"
    default_message = "Magazyn danych chwilowo niedostepny"
