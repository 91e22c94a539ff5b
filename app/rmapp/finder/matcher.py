"""Name matching between filesystem entries and an application.

A candidate name belongs to the target application when, in order:

1. it contains the full bundle identifier,
2. it contains the bundle identifier with trailing digits stripped
   (``com.vendor.teams2`` also claims ``com.vendor.teams`` files),
3. it is an ``.app`` bundle whose base name is the app name or starts
   with it at a word boundary (decisive for ``.app`` names), or
4. it or one of its tokens equals the app name, or, where token runs are
   enabled, the tokenized app name appears as a contiguous token run.

All functions here are pure.
"""

import re
from dataclasses import dataclass

_TOKEN_SPLIT = re.compile(r"[.\-_ /]+")
_APP_SUFFIX = ".app"


def tokenize(name: str) -> list[str]:
    """Split a name into lower-cased tokens.

    Delimiters are ``.``, ``-``, ``_``, space and ``/``. Empty tokens
    are dropped.

    Args:
        name: File, directory or application name.

    Returns:
        List of lower-cased tokens.
    """
    return [token for token in _TOKEN_SPLIT.split(name.lower()) if token]


def get_domain_hint(bundle_id: str) -> str:
    """Extract the domain hint from a bundle identifier.

    ``com.vendor.App`` yields ``vendor``. Identifiers with fewer than
    two labels yield an empty string.

    Args:
        bundle_id: Reverse-DNS bundle identifier.

    Returns:
        Lower-cased second label, or "".
    """
    parts = bundle_id.lower().split(".")
    if len(parts) >= 2:
        return parts[1]
    return ""


def _build_failure_table(tokens: tuple[str, ...]) -> tuple[int, ...]:
    """Compute the KMP failure function over a token sequence.

    ``table[i]`` is the length of the longest proper prefix of
    ``tokens[: i + 1]`` that is also a suffix of it.
    """
    table = [0] * len(tokens)
    k = 0
    for i in range(1, len(tokens)):
        while k > 0 and tokens[i] != tokens[k]:
            k = table[k - 1]
        if tokens[i] == tokens[k]:
            k += 1
        table[i] = k
    return tuple(table)


@dataclass(frozen=True, slots=True)
class NamePattern:
    """Tokenized application name prepared for token-run search.

    Built once per scan and shared read-only by every traversal task.

    Attributes:
        name: Lower-cased application name.
        tokens: Tokenized application name.
        failure: KMP failure table over ``tokens``.
    """

    name: str
    tokens: tuple[str, ...]
    failure: tuple[int, ...]

    @classmethod
    def compile(cls, app_name: str) -> "NamePattern":
        """Tokenize an application name and precompute its failure table."""
        tokens = tuple(tokenize(app_name))
        return cls(
            name=app_name.strip().lower(),
            tokens=tokens,
            failure=_build_failure_table(tokens),
        )

    def occurs_in(self, tokens: list[str]) -> bool:
        """Check whether the pattern appears as a contiguous token run.

        Args:
            tokens: Tokenized candidate name.

        Returns:
            True if ``self.tokens`` is a contiguous sub-sequence of ``tokens``.
        """
        if not self.tokens or len(tokens) < len(self.tokens):
            return False

        k = 0
        for token in tokens:
            while k > 0 and token != self.tokens[k]:
                k = self.failure[k - 1]
            if token == self.tokens[k]:
                k += 1
            if k == len(self.tokens):
                return True
        return False


def _matches_bundle(base: str, app_name: str) -> bool:
    """Exact or word-boundary prefix match of a stripped ``.app`` name."""
    if base == app_name:
        return True
    if not base.startswith(app_name):
        return False
    return not base[len(app_name)].isalpha()


def is_match(
    candidate: str,
    app_name: str,
    bundle_id: str = "",
    *,
    pattern: NamePattern | None = None,
    token_runs: bool = False,
) -> bool:
    """Decide whether a file or directory name belongs to an application.

    Args:
        candidate: Base name of the filesystem entry.
        app_name: Human application name.
        bundle_id: Bundle identifier; empty disables identifier rules.
        pattern: Precompiled pattern for ``app_name``. Compiled on the
            fly when omitted.
        token_runs: Allow the app name to match as a contiguous run of
            tokens inside a longer name.

    Returns:
        True if the candidate is attributed to the application.
    """
    name = candidate.lower()
    app = app_name.strip().lower()
    if not app:
        return False

    bundle = bundle_id.strip().lower()
    if bundle:
        if bundle in name:
            return True
        bundle_base = bundle.rstrip("0123456789")
        if bundle_base and bundle_base != bundle and bundle_base in name:
            return True

    if name.endswith(_APP_SUFFIX):
        return _matches_bundle(name[: -len(_APP_SUFFIX)], app)

    if name == app:
        return True

    tokens = tokenize(name)
    if app in tokens:
        return True

    if token_runs:
        if pattern is None:
            pattern = NamePattern.compile(app_name)
        # The run may end before trailing version tokens
        return pattern.occurs_in(tokens)

    return False
