# sales/api/filters.py

import django_filters

from sales.models import Invoice


class InvoiceFilter(django_filters.FilterSet):
    """
    Query params:
    - store_id, counter_id
    - date_from / date_to (YYYY-MM-DD, local dates, inclusive)
    - customer_phone
    - q (bill number contains)
    - pricing_mode, payment_method
    """

    store_id = django_filters.UUIDFilter(field_name="store_id")
    counter_id = django_filters.UUIDFilter(field_name="counter_id")
    date_from = django_filters.DateFilter(field_name="created_at", lookup_expr="date__gte")
    date_to = django_filters.DateFilter(field_name="created_at", lookup_expr="date__lte")
    customer_phone = django_filters.CharFilter(field_name="customer_phone")
    q = django_filters.CharFilter(field_name="bill_number", lookup_expr="icontains")

    class Meta:
        model = Invoice
        fields = ["pricing_mode", "payment_method"]
