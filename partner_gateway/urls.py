from django.urls import path

from .views import SubmitTrxMessageAPIView

urlpatterns = [
    path('api/submittrxmessage', SubmitTrxMessageAPIView.as_view(), name='submit-trx-message'),
    path('api/SubmitTrxMessage', SubmitTrxMessageAPIView.as_view()),
]
