"""
IP Resolver - Discover the caller's public addresses

Each address family has an ordered chain of oracles. Oracles are asked one at
a time and the first usable answer wins; a family only fails once every
oracle in its chain has failed.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Union

from .errors import ConfigurationError, OracleError, ResolutionFailed
from .models import AddressFamily, ResolvedAddress
from ..oracles.base_oracle import IPOracle
from ..oracles.dns_oracle import default_oracles

logger = logging.getLogger(__name__)

MIN_ORACLES_PER_FAMILY = 2


class IPResolver:
    """Resolves public addresses per family through fallback oracle chains."""

    def __init__(
        self,
        oracles: Optional[Dict[AddressFamily, Sequence[IPOracle]]] = None,
        timeout: float = 5.0,
    ):
        """Initialize the resolver with explicit chains or the default ones."""
        if oracles is None:
            oracles = {family: default_oracles(family, timeout) for family in AddressFamily}

        self.oracles: Dict[AddressFamily, List[IPOracle]] = {}
        for family, chain in oracles.items():
            chain = list(chain)
            if len(chain) < MIN_ORACLES_PER_FAMILY:
                raise ConfigurationError(
                    f"At least {MIN_ORACLES_PER_FAMILY} oracles are required for "
                    f"{family.label}, got {len(chain)}"
                )
            self.oracles[family] = chain

    def resolve_family(self, family: AddressFamily) -> ResolvedAddress:
        """
        Resolve one family by walking its oracle chain in order.

        Raises:
            ResolutionFailed: if no oracle produced a usable answer
        """
        chain = self.oracles.get(family)
        if not chain:
            raise ResolutionFailed(family, [("resolver", "no oracles configured")])

        attempts = []
        for oracle in chain:
            try:
                value = oracle.attempt()
            except OracleError as e:
                logger.warning(f"{family.label} oracle {e.oracle} failed: {e.cause}")
                attempts.append((e.oracle, e.cause))
                continue

            logger.info(f"Public {family.label} address is {value} (via {oracle.name})")
            return ResolvedAddress(family=family, value=value)

        raise ResolutionFailed(family, attempts)

    def resolve(
        self, families: Iterable[AddressFamily]
    ) -> Dict[AddressFamily, Union[ResolvedAddress, ResolutionFailed]]:
        """
        Resolve every requested family independently.

        Args:
            families: Address families to resolve; duplicates are ignored

        Returns:
            Mapping of family to its ResolvedAddress, or the ResolutionFailed
            error when its chain was exhausted
        """
        results: Dict[AddressFamily, Union[ResolvedAddress, ResolutionFailed]] = {}
        for family in families:
            if family in results:
                continue
            try:
                results[family] = self.resolve_family(family)
            except ResolutionFailed as e:
                logger.error(str(e))
                results[family] = e
        return results
