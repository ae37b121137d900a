from django.contrib import admin

from houses.models import House, HouseImage


class HouseImageInline(admin.TabularInline):
    model = HouseImage
    extra = 0
    fields = ["image", "position"]
    ordering = ["position"]


@admin.register(House)
class HouseAdmin(admin.ModelAdmin):
    list_display = ["title", "owner", "location", "price", "for_sell", "created_at"]
    list_filter = ["for_sell"]
    search_fields = ["title", "location", "owner__email"]
    readonly_fields = ["id", "created_at", "updated_at"]
    raw_id_fields = ["owner"]
    inlines = [HouseImageInline]
