"""
Django admin configuration for ledger transactions.

Transactions are immutable once recorded. The admin is for viewing only;
new entries are written by transactions.commands.
"""

from django.contrib import admin

from .descriptions import generate_description
from .models import Transaction


class ReadOnlyModelAdmin(admin.ModelAdmin):
    """Base admin class for append-only models."""

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Transaction)
class TransactionAdmin(ReadOnlyModelAdmin):
    list_display = [
        "id",
        "created_at",
        "type",
        "kind",
        "collective",
        "amount",
        "currency",
        "net_amount_in_collective_currency",
        "host_currency",
    ]
    list_filter = ["type", "kind", "currency", "host_currency"]
    search_fields = ["description"]
    list_select_related = ["collective"]
    readonly_fields = ["full_description"]

    @admin.display(description="Description")
    def full_description(self, obj):
        return generate_description(obj, full=True)
