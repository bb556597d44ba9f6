from django.contrib import admin

from .models import Expense, PayoutMethod


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = ["id", "collective", "from_collective", "amount", "currency", "status", "fees_payer"]
    list_filter = ["status", "type", "fees_payer", "currency"]
    search_fields = ["description"]
    raw_id_fields = ["collective", "from_collective", "payout_method", "user"]
    readonly_fields = ["public_id", "created_at", "updated_at"]


@admin.register(PayoutMethod)
class PayoutMethodAdmin(admin.ModelAdmin):
    list_display = ["id", "collective", "type", "name"]
    list_filter = ["type"]
