from django import forms

from .models import PickupLocation


class PickupLocationForm(forms.ModelForm):
    class Meta:
        model = PickupLocation
        fields = ["name", "version"]
        widgets = {"version": forms.HiddenInput}
