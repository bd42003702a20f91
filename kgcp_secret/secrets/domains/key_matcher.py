"""Candidate stored-key names for a logical key, most specific first."""
from typing import Iterator, List

from .models import ResolutionRequest


def effective_stage(request: ResolutionRequest) -> str:
    """``environment`` wins over ``stage`` when set."""
    return request.environment or request.stage


def effective_tag(request: ResolutionRequest) -> str:
    """``tag`` wins over ``dc`` when set."""
    return request.tag or request.dc


def _prefixes(request: ResolutionRequest) -> List[str]:
    # Plain concatenation: an empty namespace still yields a leading "_".
    return [
        request.namespace + "_" + request.name + "_",
        request.name + "_",
        request.namespace + "_",
        "",
    ]


def _postfixes(request: ResolutionRequest) -> List[str]:
    stage = effective_stage(request)
    tag = effective_tag(request)
    return [
        "_" + stage + "_" + tag,
        "_" + stage,
        "_" + tag,
        "",
    ]


class CandidateKeys:
    """
    Restartable sequence of the 16 qualified names for one logical key.

    Names are produced prefix-major: every postfix is tried with the
    namespace+name prefix before the name-only prefix is considered, and
    the bare logical key always comes last. Each call to ``iter()`` starts
    over, so the same instance can be replayed.
    """

    def __init__(self, key: str, request: ResolutionRequest):
        self.key = key
        self._prefixes = _prefixes(request)
        self._postfixes = _postfixes(request)

    def __iter__(self) -> Iterator[str]:
        for prefix in self._prefixes:
            for postfix in self._postfixes:
                yield prefix + self.key + postfix

    def __len__(self) -> int:
        return len(self._prefixes) * len(self._postfixes)

    def __repr__(self) -> str:
        return f"CandidateKeys({self.key!r})"


def candidates(key: str, request: ResolutionRequest) -> CandidateKeys:
    """Return the ordered candidate names for ``key`` under ``request``'s scope."""
    return CandidateKeys(key, request)
