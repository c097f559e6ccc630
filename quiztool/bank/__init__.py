from .question_bank import BANK_COLUMNS, QuestionBank, QuestionRecord, load_bank_csv

__all__ = ["BANK_COLUMNS", "QuestionBank", "QuestionRecord", "load_bank_csv"]
