from rest_framework import serializers

from partner_gateway.dto import LineItem, TransactionRequest
from partner_gateway.provider import get_transaction_provider

# Amounts and quantities are signed 64-bit on the partner side
INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


class LineItemSerializer(serializers.Serializer):
    partneritemref = serializers.CharField(default='', allow_blank=True, allow_null=True, trim_whitespace=False)
    name = serializers.CharField(default='', allow_blank=True, allow_null=True, trim_whitespace=False)
    qty = serializers.IntegerField(default=0, min_value=INT64_MIN, max_value=INT64_MAX)
    unitprice = serializers.IntegerField(default=0, min_value=INT64_MIN, max_value=INT64_MAX)


class TransactionRequestSerializer(serializers.Serializer):
    # Emptiness is checked by RequestValidator, not here
    partnerkey = serializers.CharField(default='', allow_blank=True, allow_null=True, trim_whitespace=False)
    partnerrefno = serializers.CharField(default='', allow_blank=True, allow_null=True, trim_whitespace=False)
    partnerpassword = serializers.CharField(default='', allow_blank=True, allow_null=True, trim_whitespace=False)
    totalamount = serializers.IntegerField(default=0, min_value=INT64_MIN, max_value=INT64_MAX)
    items = LineItemSerializer(many=True, required=False, allow_null=True)
    timestamp = serializers.CharField(default='', allow_blank=True, allow_null=True, trim_whitespace=False)
    sig = serializers.CharField(default='', allow_blank=True, allow_null=True, trim_whitespace=False)

    @property
    def provider(self):
        return self.context.get('provider') or get_transaction_provider()

    def create(self, validated_data):
        items = validated_data.get('items')
        data = TransactionRequest(
            partnerkey=validated_data['partnerkey'],
            partnerrefno=validated_data['partnerrefno'],
            partnerpassword=validated_data['partnerpassword'],
            totalamount=validated_data['totalamount'],
            timestamp=validated_data['timestamp'],
            sig=validated_data['sig'],
            items=[LineItem(**item) for item in items] if items is not None else None
        )
        return self.provider.submit(data)


class TransactionResultSerializer(serializers.Serializer):
    result = serializers.IntegerField(read_only=True)
    totalamount = serializers.IntegerField(read_only=True)
    totaldiscount = serializers.IntegerField(read_only=True)
    finalamount = serializers.IntegerField(read_only=True)
    resultmessage = serializers.CharField(read_only=True)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        return {key: value for key, value in data.items() if value is not None}
