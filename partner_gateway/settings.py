from django.conf import settings
from django.core.signals import setting_changed

DEFAULTS = {
    'PARTNERS': {},
    'TIMESTAMP_CHECK_ENABLED': False,
    'TIMESTAMP_MAX_SKEW_MINUTES': 5,
    'SIGNATURE_CHECK_ENABLED': False,
    'MAX_ITEM_QUANTITY': None,
}


class APISettings:
    prefix = None

    def __init__(self, prefix: str = None, defaults: dict = None):
        self.prefix = prefix
        self.defaults = defaults or {}
        self._cached_attrs = set()

    def prefixed_attr(self, attr):
        if attr.startswith(self.prefix.upper()):
            return attr
        return "%s_%s" % (self.prefix.upper(), attr.upper())

    def __getattr__(self, attr):
        if attr not in self.defaults:
            raise AttributeError("Invalid API setting: '%s'" % attr)

        val = getattr(settings, self.prefixed_attr(attr), self.defaults[attr])

        # Cache the result
        self._cached_attrs.add(attr)
        setattr(self, attr, val)
        return val

    def reload(self):
        for attr in self._cached_attrs:
            delattr(self, attr)
        self._cached_attrs.clear()


api_settings = APISettings('PARTNER_GATEWAY', DEFAULTS)


def reload_api_settings(*args, **kwargs):
    setting = kwargs['setting']
    if setting.startswith('PARTNER_GATEWAY'):
        api_settings.reload()


setting_changed.connect(reload_api_settings)
