"""
PAYMENT TERMS ENGINE
Deposit / milestone / balance reconciliation and validation for quote and
contract authoring forms.
"""

from .models import DocumentForm, PaymentSplit, ValidationOutcome
from .processor import FormValidationOrchestrator

__all__ = ['FormValidationOrchestrator', 'DocumentForm', 'PaymentSplit', 'ValidationOutcome']
