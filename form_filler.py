# file: form_filler.py
from models import ExtractionResult, TradeFormData

# ExtractionResult field -> TradeFormData field, where the names differ
_FORM_FIELD_NAMES = {'entry_timestamp': 'entry_date'}


def default_trade_form() -> TradeFormData:
    return TradeFormData()


def apply_extracted_data(form: TradeFormData, result: ExtractionResult) -> TradeFormData:
    """Returns a copy of `form` with every recovered field overlaid.

    Fields the extraction did not recover keep whatever the form already had.
    """
    updates = {
        _FORM_FIELD_NAMES.get(name, name): value
        for name, value in result.present_fields().items()
    }
    return form.model_copy(update=updates)
