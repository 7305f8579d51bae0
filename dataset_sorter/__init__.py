"""Dataset Sorter — reorganise an annotated detection dataset by class."""

__version__ = "0.1.0"
