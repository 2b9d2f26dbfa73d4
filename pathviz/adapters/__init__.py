from pathviz.adapters.records import distinct_values, lookup_field, normalize_records

__all__ = ["distinct_values", "lookup_field", "normalize_records"]
