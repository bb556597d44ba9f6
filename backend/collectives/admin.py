from django.contrib import admin

from .models import Collective


@admin.register(Collective)
class CollectiveAdmin(admin.ModelAdmin):
    list_display = ["slug", "name", "type", "currency", "host", "is_host"]
    list_filter = ["type", "currency", "is_host"]
    search_fields = ["slug", "name"]
    readonly_fields = ["public_id", "created_at"]
