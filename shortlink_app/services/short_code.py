"""
Short code generation for the URL shortener.

CodeGenerator turns secure random bytes into candidate codes;
UniquenessResolver retries it against an existence check until a free code
turns up or the attempt budget runs out.
"""

import logging
import secrets
from typing import Callable, Optional

from shortlink_app.constants import ALPHABET, DEFAULT_MAX_ATTEMPTS, MIN_SHORT_CODE_LENGTH
from shortlink_app.exceptions import (
    CodeGenerationExhaustedError,
    CodeGenerationInfrastructureError,
)

logger = logging.getLogger(__name__)

RandomSource = Callable[[int], bytes]
ExistsCheck = Callable[[str], bool]


class CodeGenerator:
    """
    Random code generator over the 54-symbol alphabet.

    Each character is ALPHABET[byte % 54]. 256 is not a multiple of 54, so
    the first 40 symbols are very slightly more likely than the rest; that is
    accepted, callers only need enough entropy to make collisions rare.

    Pros: Unpredictable, no coordination between workers
    Cons: Needs an existence check (see UniquenessResolver)
    """

    def __init__(
        self,
        default_length: int = MIN_SHORT_CODE_LENGTH,
        random_source: RandomSource = secrets.token_bytes,
    ):
        """
        Args:
            default_length: Length used when generate() gets none
            random_source: Returns n random bytes; must be safe to call from
                many threads at once. secrets.token_bytes by default, tests
                inject a deterministic one.
        """
        self.default_length = max(MIN_SHORT_CODE_LENGTH, default_length)
        self.random_source = random_source

    def generate(self, length: Optional[int] = None) -> str:
        """Generate one candidate code, floored at the minimum length"""
        if length is None:
            length = self.default_length
        length = max(MIN_SHORT_CODE_LENGTH, length)
        random_bytes = self.random_source(length)
        return "".join(ALPHABET[byte % len(ALPHABET)] for byte in random_bytes[:length])


class UniquenessResolver:
    """
    Bounded retry of CodeGenerator against an existence check.

    The check is only a fast path: the unique index on urls.short_code is the
    real guarantee, so a code can still lose the race at insert time
    (StoreConflictError).
    """

    def __init__(
        self,
        generator: CodeGenerator,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        self.generator = generator
        self.max_attempts = max_attempts

    def resolve(
        self,
        exists_check: ExistsCheck,
        length: Optional[int] = None,
        max_attempts: Optional[int] = None,
    ) -> str:
        """
        Return the first generated code for which exists_check is False.

        Args:
            exists_check: Predicate backed by the store
            length: Code length (generator default if omitted)
            max_attempts: Attempt budget (resolver default if omitted)

        Raises:
            CodeGenerationInfrastructureError: exists_check raised; not
                counted as an attempt
            CodeGenerationExhaustedError: every attempt collided
            ValueError: max_attempts is below 1
        """
        if max_attempts is None:
            max_attempts = self.max_attempts
        elif max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

        for attempt in range(1, max_attempts + 1):
            code = self.generator.generate(length)

            try:
                exists = exists_check(code)
            except Exception as exc:
                logger.error("Existence check failed while generating short code: %s", exc)
                raise CodeGenerationInfrastructureError() from exc

            if not exists:
                logger.debug("Generated unique code %r after %d attempt(s)", code, attempt)
                return code

            logger.debug("Attempt %d: code %r already exists", attempt, code)

        # Only reachable with a saturated table or a degraded entropy source
        logger.error(
            "Short code space exhausted: %d consecutive collisions", max_attempts
        )
        raise CodeGenerationExhaustedError(max_attempts)
