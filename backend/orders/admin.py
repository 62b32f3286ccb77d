from django.contrib import admin

from .models import Customer, HistoryItem, Order, OrderItem, Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "price")
    search_fields = ("name",)


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0


class HistoryItemInline(admin.TabularInline):
    model = HistoryItem
    extra = 0
    readonly_fields = ("timestamp", "created_by", "order_state", "message")


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "due_date", "due_time", "customer", "pickup_location", "state", "paid")
    list_filter = ("state", "paid", "pickup_location")
    search_fields = ("customer__full_name", "customer__phone_number")
    date_hierarchy = "due_date"
    inlines = [OrderItemInline, HistoryItemInline]


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ("id", "full_name", "phone_number")
    search_fields = ("full_name", "phone_number")
