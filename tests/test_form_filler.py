from form_filler import apply_extracted_data, default_trade_form
from models import ExtractionResult, TradeFormData


def test_default_form_matches_new_trade_defaults():
    form = default_trade_form()
    assert form.symbol == 'GBPUSD'
    assert form.direction == 'long'
    assert form.lot_size == 0.01
    assert form.status == 'open'
    assert len(form.entry_date) == len('2025-12-24T09:33')


def test_all_extracted_fields_are_applied():
    result = ExtractionResult(
        symbol='XAUUSD', direction='short', lot_size=0.2, entry_price=2650.55,
        stop_loss=2660.0, take_profit=2600.0, entry_timestamp='2025-12-24T09:33',
    )
    form = apply_extracted_data(default_trade_form(), result)

    assert form.symbol == 'XAUUSD'
    assert form.direction == 'short'
    assert form.lot_size == 0.2
    assert form.entry_price == 2650.55
    assert form.stop_loss == 2660.0
    assert form.take_profit == 2600.0
    assert form.entry_date == '2025-12-24T09:33'


def test_absent_fields_leave_form_untouched():
    form = TradeFormData(symbol='EURUSD', stop_loss=1.2, notes="breakout retest", tags=['Swing'])
    updated = apply_extracted_data(form, ExtractionResult(lot_size=0.5))

    assert updated.lot_size == 0.5
    assert updated.symbol == 'EURUSD'
    assert updated.stop_loss == 1.2
    assert updated.notes == "breakout retest"
    assert updated.tags == ['Swing']


def test_empty_result_is_a_noop():
    form = default_trade_form()
    assert apply_extracted_data(form, ExtractionResult()) == form


def test_original_form_is_not_modified():
    form = default_trade_form()
    apply_extracted_data(form, ExtractionResult(symbol='USDJPY'))
    assert form.symbol == 'GBPUSD'
