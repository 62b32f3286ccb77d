from django import forms

from locations.models import PickupLocation

from .models import Order, OrderState, Product


class OrderForm(forms.Form):
    due_date = forms.DateField()
    due_time = forms.TimeField()
    pickup_location = forms.ModelChoiceField(queryset=PickupLocation.objects.order_by("name"))
    state = forms.ChoiceField(choices=OrderState.choices, initial=OrderState.NEW)
    paid = forms.BooleanField(required=False)
    customer_full_name = forms.CharField(max_length=255, label="Customer")
    customer_phone_number = forms.RegexField(
        regex=r"^(\+\d+)?([ -]?\d+){4,14}$", max_length=20, label="Phone number",
        error_messages={"invalid": "Enter a valid phone number."},
    )
    customer_details = forms.CharField(max_length=255, required=False, label="Details")
    version = forms.IntegerField(widget=forms.HiddenInput, required=False)

    @classmethod
    def initial_for(cls, order: Order) -> dict:
        return {
            "due_date": order.due_date,
            "due_time": order.due_time,
            "pickup_location": order.pickup_location_id,
            "state": order.state,
            "paid": order.paid,
            "customer_full_name": order.customer.full_name,
            "customer_phone_number": order.customer.phone_number,
            "customer_details": order.customer.details,
            "version": order.version,
        }

    def fill(self, user, order: Order) -> None:
        """Copy the cleaned values onto ``order``; usable as a save_order filler."""
        d = self.cleaned_data
        order.due_date = d["due_date"]
        order.due_time = d["due_time"]
        order.pickup_location = d["pickup_location"]
        order.state = d["state"]
        order.paid = d["paid"]
        order.customer.full_name = d["customer_full_name"]
        order.customer.phone_number = d["customer_phone_number"]
        order.customer.details = d["customer_details"]
        if order.pk and d.get("version") is not None:
            order.version = d["version"]


class OrderItemForm(forms.Form):
    product = forms.ModelChoiceField(queryset=Product.objects.order_by("name"))
    quantity = forms.IntegerField(min_value=1, initial=1)
    comment = forms.CharField(max_length=255, required=False)


OrderItemFormSet = forms.formset_factory(OrderItemForm, extra=1, can_delete=True, min_num=1, validate_min=True)


def formset_items(formset) -> list[dict]:
    return [
        f.cleaned_data for f in formset.forms
        if f.cleaned_data and not f.cleaned_data.get("DELETE")
    ]


class CommentForm(forms.Form):
    comment = forms.CharField(max_length=255)
