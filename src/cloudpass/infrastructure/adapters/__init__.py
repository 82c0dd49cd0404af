# Infrastructure Adapters Package
from .json_mastery_store import JsonMasteryStore
from .file_question_bank import FileQuestionBank

__all__ = ["FileQuestionBank", "JsonMasteryStore"]
