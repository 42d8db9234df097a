"""Customer records, normalization, file loading, and the in-memory query engine."""
from .schemas import Customer, CustomerField, PaymentStatistics, PaymentStatus, PeriodFilter, PeriodType, Statistics
from .errors import EmptyStoreError, UnknownFieldError
