from django.contrib import admin

from .models import Order, Subscription, Tier


@admin.register(Tier)
class TierAdmin(admin.ModelAdmin):
    list_display = ["id", "collective", "name", "type", "amount", "currency"]
    list_filter = ["type"]


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    list_display = ["id", "interval", "amount", "currency", "is_active"]


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ["id", "collective", "from_collective", "tier", "total_amount", "currency"]
    raw_id_fields = ["collective", "from_collective", "tier", "subscription"]
