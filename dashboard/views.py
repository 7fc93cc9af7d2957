import logging

from django.contrib import messages
from django.contrib.auth import authenticate, login, logout
from django.db import DatabaseError
from django.shortcuts import get_object_or_404, redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_POST

from accounts.services import (
    AdminUserError, create_admin_user, delete_admin_user, is_site_admin, list_admin_users,
)
from content.editors import EDITORS, reorder_rows
from content.images import (
    CONVENIOS, SITE_IMAGES, ImagePipelineError, delete_image, replace_image,
)
from content.models import SiteContent
from content.resolver import get_site_content, save_content_value
from doctors.models import Doctor, Institute
from landing import defaults
from landing.models import Testimonial
from .decorators import admin_required, redirect_authenticated_user
from .forms import (
    AdminUserForm, CropUploadForm, DoctorForm, InstituteForm, LoginForm,
    SiteContentForm, TestimonialForm,
)

logger = logging.getLogger(__name__)


# ============================================
# HELPER FUNCTIONS
# ============================================

def _move_row(request, queryset, obj):
    """Swap a row with its neighbour; POST direction is 'up' or 'down'."""
    rows = list(queryset.order_by('display_order', 'pk'))
    index = rows.index(obj)
    target = index - 1 if request.POST.get('direction') == 'up' else index + 1
    if not 0 <= target < len(rows):
        messages.error(request, 'Não é possível mover este item.')
        return False
    try:
        reorder_rows(queryset, index, target)
    except DatabaseError:
        logger.exception("Reorder failed for %s", obj)
        messages.error(request, 'Erro ao reordenar.')
        return False
    messages.success(request, 'Ordem atualizada.')
    return True


def _upload_field_image(request, obj, field):
    """Crop an uploaded image into obj.<field>; the old image is removed afterwards."""
    form = CropUploadForm(request.POST, request.FILES)
    if not form.is_valid():
        for errors in form.errors.values():
            messages.error(request, errors[0])
        return False

    old_url = getattr(obj, field)
    try:
        url = replace_image(SITE_IMAGES, old_url, form.cleaned_data['image'], form.crop_params())
    except (ImagePipelineError, ValueError) as e:
        messages.error(request, str(e))
        return False

    setattr(obj, field, url)
    obj.save(update_fields=[field])
    messages.success(request, 'Imagem enviada!')
    return True


def _remove_field_image(request, obj, field):
    url = getattr(obj, field)
    if not url:
        messages.error(request, 'Nenhuma imagem para remover.')
        return
    setattr(obj, field, '')
    obj.save(update_fields=[field])
    delete_image(SITE_IMAGES, url)
    messages.success(request, 'Imagem removida.')


# ============== AUTH VIEWS ==============

@redirect_authenticated_user
@ensure_csrf_cookie
def login_page(request):
    """Admin sign-in. Valid credentials without the admin role are refused."""
    form = LoginForm(request.POST or None)
    next_url = request.POST.get('next') or request.GET.get('next', '')

    if request.method == 'POST' and form.is_valid():
        email = form.cleaned_data['email'].strip().lower()
        user = authenticate(request, email=email, password=form.cleaned_data['password'])

        if user is None:
            messages.error(request, 'Email ou senha inválidos.')
        elif not is_site_admin(user):
            logger.warning("Non-admin login refused: %s", email)
            messages.error(request, 'Acesso negado. Apenas administradores.')
        else:
            login(request, user)
            messages.success(request, 'Bem-vindo ao painel!')
            if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
                return redirect(next_url)
            return redirect('dashboard:home')

    return render(request, 'dashboard/login.html', {'form': form, 'next': next_url})


def logout_page(request):
    logout(request)
    messages.success(request, 'Sessão encerrada.')
    return redirect('dashboard:login')


# ============== DASHBOARD ==============

@admin_required
def dashboard_home(request):
    context = {
        'doctor_count': Doctor.objects.count(),
        'institute_count': Institute.objects.count(),
        'testimonial_count': Testimonial.objects.count(),
        'content_count': SiteContent.objects.count(),
    }
    return render(request, 'dashboard/home.html', context)


# ============== SITE CONTENT ==============

@admin_required
def content_list(request):
    form = SiteContentForm(request.POST or None)
    if request.method == 'POST':
        if form.is_valid():
            form.save()
            messages.success(request, 'Conteúdo criado!')
            return redirect('dashboard:content_list')
        messages.error(request, 'Erro ao criar conteúdo.')

    context = {
        'entries': SiteContent.objects.order_by('key'),
        'form': form,
    }
    return render(request, 'dashboard/content_list.html', context)


@admin_required
def content_edit(request, pk):
    entry = get_object_or_404(SiteContent, pk=pk)
    form = SiteContentForm(request.POST or None, instance=entry)
    if request.method == 'POST':
        if form.is_valid():
            form.save()
            messages.success(request, 'Conteúdo salvo!')
            return redirect('dashboard:content_list')
        messages.error(request, 'Erro ao salvar.')
    return render(request, 'dashboard/content_form.html', {'form': form, 'entry': entry})


@admin_required
@require_POST
def content_delete(request, pk):
    entry = get_object_or_404(SiteContent, pk=pk)
    entry.delete()
    messages.success(request, f'Conteúdo "{entry.key}" removido.')
    return redirect('dashboard:content_list')


# ============== DOCTORS ==============

@admin_required
def doctor_list(request):
    doctors = Doctor.objects.prefetch_related('institutes').order_by('display_order', 'pk')
    return render(request, 'dashboard/doctor_list.html', {'doctors': doctors})


@admin_required
def doctor_form(request, pk=None):
    doctor = get_object_or_404(Doctor, pk=pk) if pk else None
    form = DoctorForm(request.POST or None, instance=doctor)
    if request.method == 'POST':
        if form.is_valid():
            doctor = form.save()
            messages.success(request, f'{doctor.name} salvo!')
            return redirect('dashboard:doctor_list')
        messages.error(request, 'Corrija os erros do formulário.')
    context = {
        'form': form,
        'doctor': doctor,
        'upload_form': CropUploadForm(initial={'aspect': '1:1'}),
    }
    return render(request, 'dashboard/doctor_form.html', context)


@admin_required
@require_POST
def doctor_delete(request, pk):
    doctor = get_object_or_404(Doctor, pk=pk)
    photo_url = doctor.photo_url
    doctor.delete()
    if photo_url:
        delete_image(SITE_IMAGES, photo_url)
    messages.success(request, 'Médico removido.')
    return redirect('dashboard:doctor_list')


@admin_required
@require_POST
def doctor_move(request, pk):
    _move_row(request, Doctor.objects.all(), get_object_or_404(Doctor, pk=pk))
    return redirect('dashboard:doctor_list')


@admin_required
@require_POST
def doctor_photo(request, pk):
    doctor = get_object_or_404(Doctor, pk=pk)
    if request.POST.get('action') == 'remove':
        _remove_field_image(request, doctor, 'photo_url')
    else:
        _upload_field_image(request, doctor, 'photo_url')
    return redirect('dashboard:doctor_edit', pk=pk)


# ============== INSTITUTES ==============

@admin_required
def institute_list(request):
    institutes = Institute.objects.order_by('display_order', 'pk')
    return render(request, 'dashboard/institute_list.html', {'institutes': institutes})


@admin_required
def institute_form(request, pk=None):
    institute = get_object_or_404(Institute, pk=pk) if pk else None
    form = InstituteForm(request.POST or None, instance=institute)
    if request.method == 'POST':
        if form.is_valid():
            institute = form.save()
            messages.success(request, f'{institute.name} salvo!')
            return redirect('dashboard:institute_list')
        messages.error(request, 'Corrija os erros do formulário.')
    context = {
        'form': form,
        'institute': institute,
        'upload_form': CropUploadForm(initial={'aspect': '16:9'}),
    }
    return render(request, 'dashboard/institute_form.html', context)


@admin_required
@require_POST
def institute_delete(request, pk):
    institute = get_object_or_404(Institute, pk=pk)
    image_url = institute.image_url
    institute.delete()
    if image_url:
        delete_image(SITE_IMAGES, image_url)
    messages.success(request, 'Instituto removido.')
    return redirect('dashboard:institute_list')


@admin_required
@require_POST
def institute_move(request, pk):
    _move_row(request, Institute.objects.all(), get_object_or_404(Institute, pk=pk))
    return redirect('dashboard:institute_list')


@admin_required
@require_POST
def institute_image(request, pk):
    institute = get_object_or_404(Institute, pk=pk)
    if request.POST.get('action') == 'remove':
        _remove_field_image(request, institute, 'image_url')
    else:
        _upload_field_image(request, institute, 'image_url')
    return redirect('dashboard:institute_edit', pk=pk)


# ============== TESTIMONIALS ==============

@admin_required
def testimonial_list(request):
    testimonials = Testimonial.objects.order_by('display_order', 'pk')
    return render(request, 'dashboard/testimonial_list.html', {'testimonials': testimonials})


@admin_required
def testimonial_form(request, pk=None):
    testimonial = get_object_or_404(Testimonial, pk=pk) if pk else None
    form = TestimonialForm(request.POST or None, instance=testimonial)
    if request.method == 'POST':
        if form.is_valid():
            form.save()
            messages.success(request, 'Depoimento salvo!')
            return redirect('dashboard:testimonial_list')
        messages.error(request, 'Corrija os erros do formulário.')
    return render(request, 'dashboard/testimonial_form.html', {'form': form, 'testimonial': testimonial})


@admin_required
@require_POST
def testimonial_delete(request, pk):
    get_object_or_404(Testimonial, pk=pk).delete()
    messages.success(request, 'Depoimento removido.')
    return redirect('dashboard:testimonial_list')


@admin_required
@require_POST
def testimonial_toggle(request, pk):
    testimonial = get_object_or_404(Testimonial, pk=pk)
    testimonial.is_published = not testimonial.is_published
    testimonial.save(update_fields=['is_published'])
    if testimonial.is_published:
        messages.success(request, 'Depoimento publicado.')
    else:
        messages.success(request, 'Depoimento ocultado.')
    return redirect('dashboard:testimonial_list')


@admin_required
@require_POST
def testimonial_move(request, pk):
    _move_row(request, Testimonial.objects.all(), get_object_or_404(Testimonial, pk=pk))
    return redirect('dashboard:testimonial_list')


# ============== LIST EDITORS ==============

EDITOR_PAGES = {
    'faq': {'title': 'Perguntas frequentes', 'image_field': None, 'fallback': defaults.FAQS},
    'gallery': {'title': 'Galeria', 'image_field': 'image_url', 'fallback': defaults.GALLERY_SPACES},
    'exams': {'title': 'Exames', 'image_field': None, 'fallback': []},
    'convenios': {'title': 'Convênios', 'image_field': 'logo_url', 'fallback': defaults.CONVENIOS},
}

TEXT_DEFAULTS = dict(defaults.GALLERY_TEXT, exams_title='Exames')


def _draft_key(editor_cls):
    return f'draft:{editor_cls.key}'


def _load_editor(request, name):
    editor_cls = EDITORS[name]
    state = request.session.get(_draft_key(editor_cls))
    if state is not None:
        return editor_cls.from_state(state), True
    stored = SiteContent.objects.filter(key=editor_cls.key).values_list('value', flat=True).first()
    if stored is None:
        # nothing saved yet: start from what the public page shows
        return editor_cls(EDITOR_PAGES[name]['fallback']), False
    return editor_cls.from_json(stored), False


def _editor_bucket(name):
    return CONVENIOS if name == 'convenios' else SITE_IMAGES


def _apply_editor_action(request, name, editor):
    """Apply one posted action to the draft. Returns True when the draft should be kept."""
    action = request.POST.get('action')
    page = EDITOR_PAGES[name]

    if action == 'add':
        editor.add()
    elif action == 'update':
        index = int(request.POST['index'])
        for field, blank in editor.blank.items():
            if field == page['image_field']:
                continue
            if isinstance(blank, bool):
                editor.update_field(index, field, field in request.POST)
            elif field in request.POST:
                editor.update_field(index, field, request.POST[field].strip())
    elif action == 'remove':
        record = editor.remove(int(request.POST['index']))
        if page['image_field'] and record.get(page['image_field']):
            delete_image(_editor_bucket(name), record[page['image_field']])
    elif action == 'move':
        editor.move(int(request.POST['index']), int(request.POST['to']))
    elif action == 'toggle':
        editor.toggle(int(request.POST['index']))
    elif action == 'upload' and page['image_field']:
        index = int(request.POST['index'])
        editor.check_index(index)
        form = CropUploadForm(request.POST, request.FILES)
        if not form.is_valid():
            for errors in form.errors.values():
                messages.error(request, errors[0])
            return True
        fmt = 'PNG' if name == 'convenios' else 'JPEG'
        old_url = editor.items[index][page['image_field']]
        try:
            url = replace_image(_editor_bucket(name), old_url, form.cleaned_data['image'], form.crop_params(), fmt)
        except (ImagePipelineError, ValueError) as e:
            messages.error(request, str(e))
            return True
        editor.update_field(index, page['image_field'], url)
        messages.success(request, 'Imagem enviada!')
    elif action == 'remove_image' and page['image_field']:
        index = int(request.POST['index'])
        editor.check_index(index)
        url = editor.items[index][page['image_field']]
        editor.update_field(index, page['image_field'], '')
        delete_image(_editor_bucket(name), url)
    elif action == 'save':
        changed = save_content_value(editor.key, editor.serialize())
        for key in getattr(editor, 'text_keys', ()):
            if key in request.POST:
                changed = save_content_value(key, request.POST[key].strip()) or changed
        if changed:
            messages.success(request, f"{page['title']} salvo com sucesso!")
        else:
            messages.info(request, 'Nenhuma alteração para salvar.')
        return False
    elif action == 'discard':
        messages.info(request, 'Alterações descartadas.')
        return False
    else:
        messages.error(request, 'Ação inválida.')
    return True


@admin_required
def list_editor(request, name):
    editor_cls = EDITORS[name]
    editor, has_draft = _load_editor(request, name)

    if request.method == 'POST':
        try:
            keep = _apply_editor_action(request, name, editor)
        except (KeyError, IndexError, ValueError):
            messages.error(request, 'Item inválido.')
            keep = True
        except DatabaseError:
            logger.exception("Saving %s failed", editor_cls.key)
            messages.error(request, 'Erro ao salvar.')
            keep = True

        if keep:
            request.session[_draft_key(editor_cls)] = editor.to_state()
        else:
            request.session.pop(_draft_key(editor_cls), None)
        return redirect(f'dashboard:{name}_editor')

    site = get_site_content()
    context = {
        'name': name,
        'page': EDITOR_PAGES[name],
        'editor': editor,
        'records': [
            (index, record, record.get(EDITOR_PAGES[name]['image_field'] or '', ''))
            for index, record in enumerate(editor.items)
        ],
        'has_draft': has_draft,
        'text_values': {
            key: site.get(key, TEXT_DEFAULTS.get(key, ''))
            for key in getattr(editor_cls, 'text_keys', ())
        },
        'upload_form': CropUploadForm(initial={'aspect': '1:1' if name == 'convenios' else '16:9'}),
    }
    if name == 'exams':
        context['categories'] = editor.categories
    return render(request, 'dashboard/list_editor.html', context)


# ============== ADMIN USERS ==============

@admin_required
def users_page(request):
    form = AdminUserForm(request.POST or None)

    if request.method == 'POST':
        try:
            if request.POST.get('action') == 'delete':
                delete_admin_user(request.user, request.POST.get('user_id'))
                messages.success(request, 'Administrador removido.')
                return redirect('dashboard:users')
            if form.is_valid():
                user = create_admin_user(form.cleaned_data['email'], form.cleaned_data['password'])
                messages.success(request, f'Administrador {user.email} criado!')
                return redirect('dashboard:users')
            messages.error(request, 'Email e senha são obrigatórios')
        except AdminUserError as e:
            messages.error(request, e.message)

    context = {
        'admins': list_admin_users(request.user),
        'form': form,
    }
    return render(request, 'dashboard/users.html', context)
