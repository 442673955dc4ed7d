from delivery.shared.security.passwords import Argon2PasswordHasher
from delivery.shared.security.tokens import JWTService, TokenError, TokenKind

__all__ = ["Argon2PasswordHasher", "JWTService", "TokenError", "TokenKind"]
