import json
import logging
import uuid
from collections import OrderedDict

from django.db import transaction

logger = logging.getLogger(__name__)


def _new_id():
    return uuid.uuid4().hex[:12]


def array_move(items, old_index, new_index):
    """Return a copy of items with the element at old_index moved to new_index."""
    size = len(items)
    if not (0 <= old_index < size and 0 <= new_index < size):
        raise IndexError(f"Cannot move {old_index} -> {new_index} in a list of {size}")
    moved = list(items)
    moved.insert(new_index, moved.pop(old_index))
    return moved


def format_brl(raw):
    """
    Normalise a price typed into the exams editor.

    Every digit in the input counts, the last two being cents:
    "123456" and "R$ 1.234,56" both give "R$ 1.234,56".
    """
    digits = ''.join(ch for ch in str(raw or '') if ch.isdigit())
    if not digits:
        return ''
    cents = int(digits)
    reais, cents = divmod(cents, 100)
    return f"R$ {reais:,}".replace(',', '.') + f",{cents:02d}"


def exam_categories(exams):
    """Distinct non-empty categories in first-seen order, with how many exams use each."""
    counts = OrderedDict()
    for exam in exams:
        category = (exam.get('category') or '').strip()
        if category:
            counts[category] = counts.get(category, 0) + 1
    return list(counts.items())


class OrderedListEditor:
    """
    Draft of an ordered list of records stored as one JSON content value.

    Each record gets an internal id that never leaves the editor, and the
    expanded (open for editing) record is tracked by that id. Moving or
    removing other records therefore never disturbs which record is open.
    """
    key = None
    blank = {}

    def __init__(self, items=None, blank=None, expanded=None):
        if blank is not None:
            self.blank = dict(blank)
        self._ids = []
        self._records = []
        for item in items or []:
            self._append(item)
        self._expanded = None
        if expanded is not None:
            self._expanded = self._ids[expanded]

    def _append(self, item, item_id=None):
        record = dict(self.blank)
        if isinstance(item, dict):
            record.update(item)
        self._records.append(record)
        self._ids.append(item_id or _new_id())

    def check_index(self, index):
        if not 0 <= index < len(self._records):
            raise IndexError(f"No item at position {index}")

    def __len__(self):
        return len(self._records)

    @property
    def items(self):
        return [dict(record) for record in self._records]

    @property
    def expanded_index(self):
        if self._expanded is None:
            return None
        return self._ids.index(self._expanded)

    def add(self):
        self._append({})
        self._expanded = self._ids[-1]
        return len(self._records) - 1

    def normalize(self, field, value):
        return value

    def update_field(self, index, field, value):
        self.check_index(index)
        if field not in self.blank:
            raise KeyError(field)
        self._records[index][field] = self.normalize(field, value)

    def remove(self, index):
        self.check_index(index)
        removed_id = self._ids.pop(index)
        record = self._records.pop(index)
        if self._expanded == removed_id:
            self._expanded = None
        return record

    def move(self, old_index, new_index):
        self._records = array_move(self._records, old_index, new_index)
        self._ids = array_move(self._ids, old_index, new_index)

    def toggle(self, index):
        self.check_index(index)
        item_id = self._ids[index]
        self._expanded = None if self._expanded == item_id else item_id

    def serialize(self):
        return json.dumps(self._records, ensure_ascii=False)

    @classmethod
    def from_json(cls, text, blank=None):
        try:
            items = json.loads(text) if text else []
        except (TypeError, ValueError):
            logger.debug("Discarding malformed %s value", cls.key or 'list')
            items = []
        if not isinstance(items, list):
            items = []
        records = [cls.coerce(item) for item in items]
        return cls([record for record in records if record is not None], blank=blank)

    @classmethod
    def coerce(cls, item):
        """Stored entry as a record dict, or None to drop it."""
        return item if isinstance(item, dict) else None

    def to_state(self):
        return {
            'records': self.items,
            'ids': list(self._ids),
            'expanded': self._expanded,
        }

    @classmethod
    def from_state(cls, state):
        editor = cls()
        for record, item_id in zip(state.get('records', []), state.get('ids', [])):
            editor._append(record, item_id)
        if state.get('expanded') in editor._ids:
            editor._expanded = state['expanded']
        return editor


class FaqEditor(OrderedListEditor):
    key = 'faq_data'
    blank = {'question': '', 'answer': ''}


class GalleryEditor(OrderedListEditor):
    key = 'gallery_data'
    blank = {
        'icon': 'Building2',
        'label': '',
        'description': '',
        'span': 'normal',
        'image_url': '',
    }
    text_keys = ('gallery_label', 'gallery_title', 'gallery_subtitle')

    def normalize(self, field, value):
        if field == 'span':
            return 'wide' if value == 'wide' else 'normal'
        return value


class ExamsEditor(OrderedListEditor):
    key = 'exams_data'
    blank = {
        'name': '',
        'price': '',
        'description': '',
        'category': '',
        'convenio': False,
    }
    text_keys = ('exams_title',)

    def normalize(self, field, value):
        if field == 'price':
            return format_brl(value)
        if field == 'convenio':
            if isinstance(value, str):
                return value.lower() in ('1', 'true', 'on', 'yes')
            return bool(value)
        return value

    @property
    def categories(self):
        return exam_categories(self._records)


class ConveniosEditor(OrderedListEditor):
    key = 'convenios_data'
    blank = {'name': '', 'logo_url': ''}

    @classmethod
    def coerce(cls, item):
        # older rows stored plain names
        if isinstance(item, str):
            return {'name': item, 'logo_url': ''}
        return super().coerce(item)


EDITORS = {
    'faq': FaqEditor,
    'gallery': GalleryEditor,
    'exams': ExamsEditor,
    'convenios': ConveniosEditor,
}


def reorder_rows(queryset, old_index, new_index):
    """
    Move one row of a display_order-sorted queryset and renumber all rows 0..N-1.

    Returns the rows in their new order.
    """
    rows = array_move(list(queryset.order_by('display_order', 'pk')), old_index, new_index)
    for position, row in enumerate(rows):
        row.display_order = position
    with transaction.atomic():
        queryset.model.objects.bulk_update(rows, ['display_order'])
    return rows
