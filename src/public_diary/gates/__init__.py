"""Request gates that run before the diary write path."""

from public_diary.gates.auth import verify_admin_token
from public_diary.gates.captcha import TurnstileVerifier
from public_diary.gates.rate_limit import RateLimiter

__all__ = ["RateLimiter", "TurnstileVerifier", "verify_admin_token"]
