"""Root conftest: configure Django for the test run."""

import django
from django.conf import settings


def pytest_configure():
    settings.configure(
        DEBUG=False,
        SECRET_KEY='partner-gateway-tests',
        USE_TZ=True,
        TIME_ZONE='Asia/Kuala_Lumpur',
        INSTALLED_APPS=[
            'django.contrib.contenttypes',
            'django.contrib.auth',
            'rest_framework',
            'partner_gateway',
        ],
        DATABASES={},
        ROOT_URLCONF='partner_gateway.urls',
        REST_FRAMEWORK={
            'UNAUTHENTICATED_USER': None,
        },
        PARTNER_GATEWAY_PARTNERS={
            'FAKEGOOGLE': 'FAKEPASSWORD1234',
            'FAKEPEOPLE': 'FAKEPASSWORD4578',
        },
    )
    django.setup()
