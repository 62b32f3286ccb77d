from django import forms

from .models import User
from .services import PASSWORD_HINT, is_valid_password


class UserForm(forms.ModelForm):
    # never pre-filled; blank on edit keeps the current password
    password = forms.CharField(widget=forms.PasswordInput(render_value=False), required=False, help_text=PASSWORD_HINT)

    class Meta:
        model = User
        fields = ["email", "first_name", "last_name", "role"]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["first_name"].required = True
        self.fields["last_name"].required = True

    def clean_password(self):
        v = self.cleaned_data.get("password") or ""
        if not v and not self.instance.pk:
            raise forms.ValidationError("Password is required")
        if v and not is_valid_password(v):
            raise forms.ValidationError(PASSWORD_HINT)
        return v
