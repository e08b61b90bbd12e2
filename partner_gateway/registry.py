from collections.abc import Mapping
from types import MappingProxyType

from partner_gateway.settings import api_settings


class PartnerRegistry(Mapping):
    """Read-only partner key to shared secret lookup.

    The mapping is copied on construction so later changes to the source dict
    are never observed by running requests.
    """

    def __init__(self, partners: dict = None):
        self._partners = MappingProxyType(dict(partners or {}))

    def __getitem__(self, partner_key: str) -> str:
        return self._partners[partner_key]

    def __iter__(self):
        return iter(self._partners)

    def __len__(self):
        return len(self._partners)

    def __repr__(self):
        return '<PartnerRegistry partners=%r>' % sorted(self._partners)

    @classmethod
    def from_settings(cls):
        return cls(api_settings.PARTNERS)
