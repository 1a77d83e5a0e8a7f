from marshmallow import Schema, fields, ValidationError, validates_schema
from marshmallow.validate import Length, Range


class SymbolSchema(Schema):
    id = fields.Str(required=True, validate=Length(equal=1))
    name = fields.Str(required=True, validate=Length(min=1, max=50))
    weight = fields.Float(required=True, validate=Range(min=0, min_inclusive=False))
    base_pay = fields.Float(validate=Range(min=0, min_inclusive=False))
    is_wild = fields.Bool(load_default=False)
    is_scatter = fields.Bool(load_default=False)
    color = fields.Str(load_default=None)

    @validates_schema
    def validate_roles(self, data, **kwargs):
        if data.get('is_wild') and data.get('is_scatter'):
            raise ValidationError('A symbol cannot be both wild and scatter.', 'is_wild')
        special = data.get('is_wild') or data.get('is_scatter')
        if special and 'base_pay' in data:
            raise ValidationError('Wild and scatter symbols have no base pay.', 'base_pay')
        if not special and 'base_pay' not in data:
            raise ValidationError('Standard symbols need a base pay.', 'base_pay')


class LayoutSchema(Schema):
    rows = fields.Int(required=True, validate=Range(min=3))
    columns = fields.Int(required=True, validate=Range(min=3))


class ScatterSchema(Schema):
    min_count = fields.Int(required=True, validate=Range(min=1))
    step = fields.Float(required=True, validate=Range(min=0))


class GameSchema(Schema):
    name = fields.Str(required=True, validate=Length(min=1))
    short_name = fields.Str(required=True, validate=Length(min=1))
    layout = fields.Nested(LayoutSchema, required=True)
    symbols = fields.List(fields.Nested(SymbolSchema), required=True, validate=Length(min=3))
    min_run_length = fields.Int(load_default=3, validate=Range(min=1))
    scatter = fields.Nested(ScatterSchema, required=True)
    bet_levels = fields.List(fields.Int(validate=Range(min=1)), required=True, validate=Length(min=1))
    default_bet_index = fields.Int(load_default=0, validate=Range(min=0))
    start_balance = fields.Int(required=True, validate=Range(min=0))
    bonus_amount = fields.Int(required=True, validate=Range(min=1))

    @validates_schema
    def validate_symbol_set(self, data, **kwargs):
        symbols = data.get('symbols') or []
        ids = [s['id'] for s in symbols]
        if len(set(ids)) != len(ids):
            raise ValidationError('Symbol ids must be unique.', 'symbols')
        wilds = [s for s in symbols if s.get('is_wild')]
        scatters = [s for s in symbols if s.get('is_scatter')]
        if len(wilds) != 1:
            raise ValidationError(f'Exactly one wild symbol is required (found {len(wilds)}).', 'symbols')
        if len(scatters) != 1:
            raise ValidationError(f'Exactly one scatter symbol is required (found {len(scatters)}).', 'symbols')

    @validates_schema
    def validate_bet_levels(self, data, **kwargs):
        levels = data.get('bet_levels') or []
        if any(later <= earlier for earlier, later in zip(levels, levels[1:])):
            raise ValidationError('Bet levels must be strictly ascending.', 'bet_levels')
        index = data.get('default_bet_index', 0)
        if levels and index >= len(levels):
            raise ValidationError(f'Default bet index {index} is out of range for {len(levels)} bet levels.', 'default_bet_index')


class GameConfigSchema(Schema):
    game = fields.Nested(GameSchema, required=True)
