# dashboard/forms.py

from django import forms
from django.conf import settings
from django.utils.text import slugify

from content.images import ASPECT_PRESETS, CropParams
from content.models import SiteContent
from doctors.models import Doctor, Institute
from landing.models import Testimonial


class LoginForm(forms.Form):
    email = forms.EmailField(widget=forms.EmailInput(attrs={
        'class': 'form-control',
        'placeholder': 'admin@exemplo.com',
        'autofocus': True,
    }))
    password = forms.CharField(widget=forms.PasswordInput(attrs={
        'class': 'form-control',
        'placeholder': 'Senha',
    }))


class SlugFromNameMixin:
    """Fill an empty slug from the name, keeping it unique."""

    def clean_slug(self):
        slug = self.cleaned_data.get('slug') or slugify(self.cleaned_data.get('name', ''))
        if not slug:
            raise forms.ValidationError('Informe um identificador.')
        model = self._meta.model
        clash = model.objects.filter(slug=slug).exclude(pk=self.instance.pk)
        if clash.exists():
            raise forms.ValidationError('Já existe um registro com este identificador.')
        return slug


class DoctorForm(SlugFromNameMixin, forms.ModelForm):
    """Create/update a doctor and the institutes they work at"""

    institutes = forms.ModelMultipleChoiceField(
        queryset=Institute.objects.all(),
        required=False,
        widget=forms.CheckboxSelectMultiple,
    )

    class Meta:
        model = Doctor
        fields = ['name', 'slug', 'specialty', 'license', 'bio', 'display_order']
        widgets = {
            'name': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Dr. Nome Sobrenome'}),
            'slug': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'dr-nome-sobrenome'}),
            'specialty': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Cardiologista'}),
            'license': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'CRM/SP 123456'}),
            'bio': forms.Textarea(attrs={'class': 'form-control', 'rows': 4}),
            'display_order': forms.NumberInput(attrs={'class': 'form-control'}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['slug'].required = False
        if self.instance.pk:
            self.fields['institutes'].initial = self.instance.institutes.all()

    def save(self, commit=True):
        doctor = super().save(commit=commit)
        if commit:
            doctor.institutes.set(self.cleaned_data.get('institutes', []))
        return doctor


class InstituteForm(SlugFromNameMixin, forms.ModelForm):
    """Services are edited as one comma-separated line"""

    services_text = forms.CharField(
        label='Serviços',
        required=False,
        help_text='Separe os serviços por vírgula',
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Ecocardiograma, Holter 24h'}),
    )

    class Meta:
        model = Institute
        fields = ['name', 'slug', 'category', 'description', 'icon', 'display_order']
        widgets = {
            'name': forms.TextInput(attrs={'class': 'form-control'}),
            'slug': forms.TextInput(attrs={'class': 'form-control'}),
            'category': forms.TextInput(attrs={'class': 'form-control'}),
            'description': forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
            'icon': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Heart'}),
            'display_order': forms.NumberInput(attrs={'class': 'form-control'}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['slug'].required = False
        if self.instance.pk:
            self.fields['services_text'].initial = ', '.join(self.instance.services or [])

    def clean_services_text(self):
        raw = self.cleaned_data.get('services_text', '')
        return [name.strip() for name in raw.split(',') if name.strip()]

    def save(self, commit=True):
        self.instance.services = self.cleaned_data['services_text']
        return super().save(commit=commit)


class TestimonialForm(forms.ModelForm):
    class Meta:
        model = Testimonial
        fields = ['quote', 'patient_initials', 'specialty', 'rating', 'is_published', 'display_order']
        widgets = {
            'quote': forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
            'patient_initials': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'M.S.'}),
            'specialty': forms.TextInput(attrs={'class': 'form-control'}),
            'rating': forms.NumberInput(attrs={'class': 'form-control', 'min': 1, 'max': 5}),
            'is_published': forms.CheckboxInput(attrs={'class': 'form-check-input'}),
            'display_order': forms.NumberInput(attrs={'class': 'form-control'}),
        }


class SiteContentForm(forms.ModelForm):
    """The key can only be set when the entry is created"""

    class Meta:
        model = SiteContent
        fields = ['key', 'value']
        widgets = {
            'key': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'hero_title'}),
            'value': forms.Textarea(attrs={'class': 'form-control', 'rows': 4}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.instance.pk:
            self.fields['key'].disabled = True


class CropUploadForm(forms.Form):
    """An uploaded image plus the crop box chosen in the browser"""

    image = forms.ImageField()
    aspect = forms.ChoiceField(choices=[(key, key) for key in ASPECT_PRESETS], initial='16:9')
    x = forms.IntegerField(min_value=0, initial=0)
    y = forms.IntegerField(min_value=0, initial=0)
    width = forms.IntegerField(min_value=1, required=False)
    height = forms.IntegerField(min_value=1, required=False)
    rotation = forms.FloatField(min_value=0, max_value=360, initial=0, required=False)

    def clean_image(self):
        image = self.cleaned_data['image']
        if image.size > settings.MAX_UPLOAD_SIZE:
            raise forms.ValidationError('Imagem muito grande (máximo 10MB).')
        return image

    def crop_params(self):
        """
        Crop box from the form. Without an explicit box, take the largest
        centred box of the chosen aspect.
        """
        data = self.cleaned_data
        if data.get('width') and data.get('height'):
            return CropParams(
                x=data['x'] or 0,
                y=data['y'] or 0,
                width=data['width'],
                height=data['height'],
                rotation=data.get('rotation') or 0,
            )

        width, height = data['image'].image.size
        ratio = ASPECT_PRESETS[data['aspect']]
        box_w, box_h = width, round(width / ratio)
        if box_h > height:
            box_w, box_h = round(height * ratio), height
        return CropParams(
            x=(width - box_w) // 2,
            y=(height - box_h) // 2,
            width=box_w,
            height=box_h,
            rotation=0,
        )


class AdminUserForm(forms.Form):
    email = forms.EmailField(widget=forms.EmailInput(attrs={'class': 'form-control'}))
    password = forms.CharField(min_length=6, widget=forms.PasswordInput(attrs={'class': 'form-control'}))
