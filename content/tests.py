import io
import json
import re

import pytest
from unittest.mock import patch
from django.core.cache import cache
from django.core.management import call_command
from django.db import DatabaseError
from django.template import Context, Template
from django.urls import reverse
from PIL import Image
from rest_framework import status

from config.storage_backends import get_bucket_storage
from content.editors import (
    ConveniosEditor,
    ExamsEditor,
    FaqEditor,
    GalleryEditor,
    array_move,
    exam_categories,
    format_brl,
    reorder_rows,
)
from content.images import (
    CropParams,
    ImagePipelineError,
    crop_image,
    delete_image,
    object_path,
    random_object_name,
    replace_image,
    upload_image,
)
from content.models import SiteContent
from content.resolver import (
    ContentSnapshot,
    get_site_content,
    invalidate_content_cache,
    load_content_map,
    save_content_value,
)
from doctors.models import Doctor, Institute
from landing.models import Testimonial


# ============================================
# CONTENT SNAPSHOT TESTS
# ============================================

class TestContentSnapshot:
    """Lookups over a fixed key/value map"""

    def test_get_present_key(self):
        site = ContentSnapshot({'hero_title': 'Olá'})
        assert site.get('hero_title', 'fallback') == 'Olá'

    def test_get_absent_key_returns_fallback(self):
        site = ContentSnapshot({})
        assert site.get('hero_title', 'fallback') == 'fallback'
        assert site.get('hero_title') == ''

    def test_get_empty_value_is_not_absent(self):
        """Verify the fallback is used only when the key is missing"""
        site = ContentSnapshot({'hero_title': ''})
        assert site.get('hero_title', 'fallback') == ''

    def test_get_json_parses_value(self):
        site = ContentSnapshot({'faq_data': '[{"question": "Q1", "answer": "A1"}]'})
        assert site.get_json('faq_data', []) == [{'question': 'Q1', 'answer': 'A1'}]

    @pytest.mark.parametrize('mapping', [
        {},
        {'faq_data': ''},
        {'faq_data': '{not json'},
        {'faq_data': '[1, 2'},
    ])
    def test_get_json_fallbacks(self, mapping):
        fallback = [{'question': 'default'}]
        assert ContentSnapshot(mapping).get_json('faq_data', fallback) is fallback

    def test_get_json_shape_is_not_checked_by_default(self):
        site = ContentSnapshot({'faq_data': '{"question": "Q1"}'})
        assert site.get_json('faq_data', []) == {'question': 'Q1'}

    def test_get_json_expect_rejects_wrong_type(self):
        site = ContentSnapshot({'faq_data': '{"question": "Q1"}'})
        assert site.get_json('faq_data', ['fallback'], expect=list) == ['fallback']

    def test_as_dict_is_a_copy(self):
        site = ContentSnapshot({'a': '1'})
        site.as_dict()['a'] = '2'
        assert site.get('a') == '1'


# ============================================
# RESOLVER TESTS
# ============================================

@pytest.mark.django_db
class TestResolver:
    """Loading, caching and invalidating the content map"""

    def test_load_content_map(self, site_content):
        assert load_content_map() == {'hero_title': 'Cuidando de você'}

    def test_map_is_cached(self, site_content, django_assert_num_queries):
        load_content_map()
        with django_assert_num_queries(0):
            load_content_map()

    def test_save_invalidates_cache(self, site_content):
        load_content_map()
        SiteContent.objects.create(key='hero_label', value='Novo')

        assert load_content_map()['hero_label'] == 'Novo'

    def test_update_invalidates_cache(self, site_content):
        load_content_map()
        site_content.value = 'Atualizado'
        site_content.save()

        assert get_site_content().get('hero_title') == 'Atualizado'

    def test_delete_invalidates_cache(self, site_content):
        load_content_map()
        site_content.delete()

        assert 'hero_title' not in get_site_content()

    def test_invalidate_content_cache(self, site_content):
        load_content_map()
        invalidate_content_cache()
        assert cache.get('site-content') is None

    def test_database_error_gives_empty_snapshot(self):
        with patch('content.resolver.load_content_map', side_effect=DatabaseError('down')):
            site = get_site_content()

        assert len(site) == 0
        assert site.get('hero_title', 'fallback') == 'fallback'

    def test_save_content_value_creates_row(self):
        assert save_content_value('faq_data', '[]') is True
        assert SiteContent.objects.get(key='faq_data').value == '[]'

    def test_save_content_value_reports_no_change(self, site_content):
        assert save_content_value('hero_title', 'Cuidando de você') is False
        assert save_content_value('hero_title', 'Outro') is True
        site_content.refresh_from_db()
        assert site_content.value == 'Outro'


# ============================================
# TEMPLATE TAG TESTS
# ============================================

@pytest.mark.django_db
class TestTemplateTags:

    def render(self, source, context=None):
        return Template('{% load site_content %}' + source).render(Context(context or {}))

    def test_content_tag(self, site_content):
        assert self.render('{% content "hero_title" "Padrão" %}') == 'Cuidando de você'

    def test_content_tag_fallback(self):
        assert self.render('{% content "hero_title" "Padrão" %}') == 'Padrão'

    def test_content_tag_uses_snapshot_from_context(self):
        site = ContentSnapshot({'hero_title': 'Do contexto'})
        assert self.render('{% content "hero_title" %}', {'site': site}) == 'Do contexto'

    def test_content_json_tag(self):
        SiteContent.objects.create(key='faq_data', value='[{"question": "Q1", "answer": "A1"}]')
        output = self.render('{% content_json "faq_data" as faqs %}{% for f in faqs %}{{ f.question }}{% endfor %}')
        assert output == 'Q1'


# ============================================
# CONTENT API TESTS
# ============================================

@pytest.mark.django_db
class TestContentAPI:

    def test_content_map_is_public(self, api_client, site_content):
        response = api_client.get(reverse('site-content'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'hero_title': 'Cuidando de você'}


# ============================================
# ORDERED LIST EDITOR TESTS
# ============================================

def faq_items(n):
    return [{'question': f'Q{i}', 'answer': f'A{i}'} for i in range(n)]


class TestOrderedListEditor:
    """In-memory list editing with a tracked expanded record"""

    def test_add_appends_blank_and_expands(self):
        editor = FaqEditor(faq_items(2))
        index = editor.add()

        assert index == 2
        assert editor.items[2] == {'question': '', 'answer': ''}
        assert editor.expanded_index == 2

    def test_update_field(self):
        editor = FaqEditor(faq_items(1))
        editor.update_field(0, 'question', 'Nova?')

        assert editor.items[0]['question'] == 'Nova?'

    def test_update_unknown_field(self):
        editor = FaqEditor(faq_items(1))
        with pytest.raises(KeyError):
            editor.update_field(0, 'bogus', 'x')

    def test_update_out_of_range(self):
        with pytest.raises(IndexError):
            FaqEditor(faq_items(1)).update_field(3, 'question', 'x')

    def test_remove_expanded_collapses(self):
        editor = FaqEditor(faq_items(3), expanded=1)
        editor.remove(1)

        assert editor.expanded_index is None
        assert [r['question'] for r in editor.items] == ['Q0', 'Q2']

    def test_remove_before_expanded_shifts_pointer(self):
        editor = FaqEditor(faq_items(4), expanded=2)
        editor.remove(0)

        assert editor.expanded_index == 1
        assert editor.items[editor.expanded_index]['question'] == 'Q2'

    def test_remove_after_expanded_keeps_pointer(self):
        editor = FaqEditor(faq_items(4), expanded=1)
        editor.remove(3)

        assert editor.expanded_index == 1

    def test_move_expanded_item_follows_it(self):
        editor = FaqEditor(faq_items(4), expanded=0)
        editor.move(0, 3)

        assert editor.expanded_index == 3
        assert [r['question'] for r in editor.items] == ['Q1', 'Q2', 'Q3', 'Q0']

    def test_move_across_expanded_shifts_pointer(self):
        editor = FaqEditor(faq_items(4), expanded=2)
        editor.move(3, 0)

        assert editor.expanded_index == 3
        assert editor.items[3]['question'] == 'Q2'

    def test_adjacent_swap(self):
        """Verify a single adjacent move only swaps those two positions"""
        before = faq_items(5)
        editor = FaqEditor(before)
        editor.move(2, 3)
        after = editor.items

        assert after[2] == before[3]
        assert after[3] == before[2]
        assert [after[i] for i in (0, 1, 4)] == [before[i] for i in (0, 1, 4)]

    def test_move_out_of_range(self):
        with pytest.raises(IndexError):
            FaqEditor(faq_items(2)).move(0, 5)

    def test_toggle(self):
        editor = FaqEditor(faq_items(2))
        editor.toggle(1)
        assert editor.expanded_index == 1
        editor.toggle(1)
        assert editor.expanded_index is None
        editor.toggle(0)
        editor.toggle(1)
        assert editor.expanded_index == 1

    def test_serialize(self):
        editor = FaqEditor([{'question': 'Olá?', 'answer': 'Sim'}])
        assert json.loads(editor.serialize()) == [{'question': 'Olá?', 'answer': 'Sim'}]
        assert 'Olá' in editor.serialize()

    @pytest.mark.parametrize('text', [None, '', 'not json', '{"a": 1}', '"text"'])
    def test_from_json_malformed_is_empty(self, text):
        assert len(FaqEditor.from_json(text)) == 0

    def test_from_json_fills_missing_fields(self):
        editor = GalleryEditor.from_json('[{"label": "Recepção"}]')

        assert editor.items[0]['icon'] == 'Building2'
        assert editor.items[0]['span'] == 'normal'
        assert editor.items[0]['label'] == 'Recepção'

    def test_from_json_custom_blank(self):
        editor = FaqEditor.from_json('[{}]', blank={'question': '?', 'answer': ''})
        assert editor.items[0]['question'] == '?'

    def test_state_round_trip_keeps_expansion(self):
        editor = FaqEditor(faq_items(3), expanded=2)
        restored = FaqEditor.from_state(json.loads(json.dumps(editor.to_state())))

        assert restored.items == editor.items
        assert restored.expanded_index == 2

    def test_gallery_span_normalized(self):
        editor = GalleryEditor([{}])
        editor.update_field(0, 'span', 'giant')
        assert editor.items[0]['span'] == 'normal'
        editor.update_field(0, 'span', 'wide')
        assert editor.items[0]['span'] == 'wide'

    def test_exams_price_and_convenio(self):
        editor = ExamsEditor([{}])
        editor.update_field(0, 'price', '1234,5x6')
        editor.update_field(0, 'convenio', 'on')

        assert editor.items[0]['price'] == 'R$ 1.234,56'
        assert editor.items[0]['convenio'] is True

    def test_convenios_blank(self):
        editor = ConveniosEditor()
        editor.add()
        assert editor.items == [{'name': '', 'logo_url': ''}]

    def test_convenios_keep_plain_names(self):
        editor = ConveniosEditor.from_json('["Bradesco", {"name": "Vale", "logo_url": "/v.png"}, 3]')

        assert editor.items == [
            {'name': 'Bradesco', 'logo_url': ''},
            {'name': 'Vale', 'logo_url': '/v.png'},
        ]

    def test_faq_drops_plain_strings(self):
        assert len(FaqEditor.from_json('["Q1", {"question": "Q2"}]')) == 1


class TestFormatting:

    @pytest.mark.parametrize('raw,expected', [
        ('', ''),
        ('abc', ''),
        ('5', 'R$ 0,05'),
        ('150', 'R$ 1,50'),
        ('123456', 'R$ 1.234,56'),
        ('R$ 1.234,56', 'R$ 1.234,56'),
        ('100000000', 'R$ 1.000.000,00'),
    ])
    def test_format_brl(self, raw, expected):
        assert format_brl(raw) == expected

    def test_exam_categories(self):
        exams = [
            {'category': 'Sangue'},
            {'category': ''},
            {'category': 'Imagem'},
            {'category': 'Sangue'},
            {},
        ]
        assert exam_categories(exams) == [('Sangue', 2), ('Imagem', 1)]

    def test_array_move(self):
        assert array_move(['a', 'b', 'c'], 0, 2) == ['b', 'c', 'a']
        assert array_move(['a', 'b', 'c'], 2, 0) == ['c', 'a', 'b']


@pytest.mark.django_db
class TestReorderRows:
    """display_order renumbering for database rows"""

    def test_reorder_is_contiguous(self):
        for order in (5, 10, 20):
            Testimonial.objects.create(quote='q', patient_initials=f'{order}', display_order=order)

        reorder_rows(Testimonial.objects.all(), 2, 0)

        rows = list(Testimonial.objects.order_by('display_order'))
        assert [r.patient_initials for r in rows] == ['20', '5', '10']
        assert [r.display_order for r in rows] == [0, 1, 2]

    def test_adjacent_swap(self):
        for i in range(4):
            Testimonial.objects.create(quote='q', patient_initials=str(i), display_order=i)

        reorder_rows(Testimonial.objects.all(), 1, 2)

        initials = list(Testimonial.objects.order_by('display_order').values_list('patient_initials', flat=True))
        assert initials == ['0', '2', '1', '3']

    def test_out_of_range(self):
        Testimonial.objects.create(quote='q', patient_initials='A')
        with pytest.raises(IndexError):
            reorder_rows(Testimonial.objects.all(), 0, 1)


# ============================================
# IMAGE PIPELINE TESTS
# ============================================

class TestCropImage:

    def test_crop_jpeg(self, image_factory):
        data = crop_image(image_factory(size=(320, 180)), CropParams(x=10, y=10, width=160, height=90))
        result = Image.open(io.BytesIO(data))

        assert result.format == 'JPEG'
        assert result.size == (160, 90)
        assert result.mode == 'RGB'

    def test_crop_png_keeps_alpha(self, image_factory):
        source = image_factory(size=(100, 100), color=(0, 0, 0, 0), mode='RGBA')
        data = crop_image(source, CropParams(x=0, y=0, width=50, height=50), fmt='PNG')
        result = Image.open(io.BytesIO(data))

        assert result.format == 'PNG'
        assert result.mode == 'RGBA'

    def test_rotation_expands_canvas(self, image_factory):
        data = crop_image(image_factory(size=(320, 180)), CropParams(x=0, y=0, width=180, height=320, rotation=90))
        assert Image.open(io.BytesIO(data)).size == (180, 320)

    def test_unreadable_image(self):
        with pytest.raises(ImagePipelineError):
            crop_image(io.BytesIO(b'not an image'), CropParams(x=0, y=0, width=10, height=10))

    def test_unsupported_format(self, image_factory):
        with pytest.raises(ValueError):
            crop_image(image_factory(), CropParams(x=0, y=0, width=10, height=10), fmt='GIF')

    @pytest.mark.parametrize('box', [
        {'x': 500, 'y': 500, 'width': 50, 'height': 50},
        {'x': 300, 'y': 0, 'width': 50, 'height': 50},
        {'x': 0, 'y': 150, 'width': 50, 'height': 50},
        {'x': -1, 'y': 0, 'width': 50, 'height': 50},
    ])
    def test_box_outside_image(self, image_factory, box):
        with pytest.raises(ImagePipelineError):
            crop_image(image_factory(size=(320, 180)), CropParams(**box), fmt='PNG')

    def test_box_checked_against_rotated_size(self, image_factory):
        # 320x180 turned 90 degrees is 180 wide
        with pytest.raises(ImagePipelineError):
            crop_image(image_factory(size=(320, 180)), CropParams(x=0, y=0, width=320, height=180, rotation=90))

    def test_box_on_image_edge(self, image_factory):
        data = crop_image(image_factory(size=(320, 180)), CropParams(x=270, y=130, width=50, height=50), fmt='PNG')
        result = Image.open(io.BytesIO(data)).convert('RGB')

        assert result.getpixel((49, 49)) == (200, 30, 30)

    @pytest.mark.parametrize('kwargs', [
        {'width': 0, 'height': 10},
        {'width': 10, 'height': -5},
    ])
    def test_invalid_params(self, kwargs):
        with pytest.raises(ValueError):
            CropParams(x=0, y=0, **kwargs)

    def test_random_object_name(self):
        assert re.match(r'^\d{13}-[0-9a-z]{10}\.png$', random_object_name('png'))
        assert random_object_name('jpg') != random_object_name('jpg')


class TestStorage:
    """Upload and delete against the local bucket storage"""

    def test_upload_returns_public_url(self):
        url = upload_image('site-images', b'fake-bytes', 'jpg')

        assert url.startswith('/media/site-images/')
        assert get_bucket_storage('site-images').exists(object_path('site-images', url))

    def test_upload_and_delete(self):
        url = upload_image('convenios', b'logo', 'png')
        path = object_path('convenios', url)

        assert delete_image('convenios', url) is True
        assert not get_bucket_storage('convenios').exists(path)

    def test_delete_url_outside_bucket_is_ignored(self):
        with patch.object(get_bucket_storage('convenios'), 'delete') as mock_delete:
            assert delete_image('convenios', 'https://example.com/other/logo.png') is False
            assert delete_image('convenios', '') is False

        mock_delete.assert_not_called()

    def test_delete_failure_is_swallowed(self):
        storage = get_bucket_storage('site-images')
        with patch.object(storage, 'delete', side_effect=OSError('denied')):
            assert delete_image('site-images', '/media/site-images/123-abc.jpg') is False

    def test_upload_failure_raises(self):
        storage = get_bucket_storage('site-images')
        with patch.object(storage, 'save', side_effect=OSError('bucket offline')):
            with pytest.raises(ImagePipelineError):
                upload_image('site-images', b'data', 'jpg')

    def test_unknown_bucket(self):
        with pytest.raises(ValueError):
            upload_image('nope', b'data', 'jpg')

    def test_replace_deletes_old_object(self, image_factory):
        old_url = upload_image('site-images', b'old', 'jpg')

        new_url = replace_image('site-images', old_url, image_factory(), CropParams(x=0, y=0, width=50, height=50))

        storage = get_bucket_storage('site-images')
        assert new_url != old_url
        assert new_url.endswith('.jpg')
        assert storage.exists(object_path('site-images', new_url))
        assert not storage.exists(object_path('site-images', old_url))

    def test_replace_failure_keeps_old_object(self, image_factory):
        old_url = upload_image('site-images', b'old', 'jpg')

        with patch('content.images.upload_image', side_effect=ImagePipelineError('offline')):
            with pytest.raises(ImagePipelineError):
                replace_image('site-images', old_url, image_factory(), CropParams(x=0, y=0, width=50, height=50))

        assert get_bucket_storage('site-images').exists(object_path('site-images', old_url))


# ============================================
# SEED COMMAND TESTS
# ============================================

@pytest.mark.django_db
class TestSeedContent:

    def test_seed_creates_defaults(self):
        call_command('seed_content')

        assert Institute.objects.count() == 5
        assert Doctor.objects.count() == 6
        assert Testimonial.objects.count() == 5
        faqs = get_site_content().get_json('faq_data', [])
        assert len(faqs) == 5
        assert Doctor.objects.get(slug='dr-carlos-mendes').institutes.get().slug == 'cardiologia'

    def test_seed_is_idempotent(self):
        call_command('seed_content')
        call_command('seed_content')

        assert Doctor.objects.count() == 6

    def test_seed_keeps_existing_values(self, site_content):
        call_command('seed_content', '--content-only')

        site_content.refresh_from_db()
        assert site_content.value == 'Cuidando de você'
