from typing import Iterable


def find_unknown_fields(fields: dict, allowed: Iterable[str]) -> list[str]:
    """
    Return the keys of `fields` that are not in `allowed`, sorted.

    Repositories pass their writable field names as `allowed`; keys such as `name_key`
    or `id` are derived or storage-assigned and may never come from a caller.
    """
    allowed = set(allowed)
    return sorted(k for k in fields if k not in allowed)


def get_required_columns(model, candidates: Iterable[str]) -> list[str]:
    """
    Columns among `candidates` that are NOT NULL and have no client or server default.
    """
    required = []
    columns = model.__table__.columns
    for name in candidates:
        col = columns.get(name)
        if col is None:
            continue
        has_default = col.default is not None or col.server_default is not None
        if not col.nullable and not has_default:
            required.append(name)
    return required


def find_missing_fields(model, fields: dict, candidates: Iterable[str]) -> list[str]:
    """
    Required columns that are absent, None, or (for strings) blank after stripping.
    """
    missing = []
    for name in get_required_columns(model, candidates):
        value = fields.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(name)
    return missing
