"""Progress tracking"""

from abc import ABC, abstractmethod


class ProgressTracker(ABC):
    """Abstract progress tracker, notified once per sheet"""

    @abstractmethod
    def start(self, operation: str, total: int):
        """Begin an export or import covering ``total`` sheets"""
        pass

    @abstractmethod
    def start_section(self, index: int, name: str):
        """Start a sheet"""
        pass

    @abstractmethod
    def complete_section(self, index: int):
        """Complete a sheet"""
        pass

    @abstractmethod
    def fail(self, index: int, message: str):
        """Mark a sheet as failed"""
        pass

    @abstractmethod
    def complete(self):
        """Mark the export or import as complete"""
        pass


class ConsoleProgress(ProgressTracker):
    """Prints one line per sheet, then a summary"""

    def __init__(self):
        self.operation = "Workbook"
        self.total = 0
        self.names = {}
        self.completed = set()
        self.failed = {}

    def _label(self, index: int) -> str:
        position = f"Sheet {index + 1}/{self.total}" if self.total else f"Sheet {index + 1}"
        return f"{position}: {self.names.get(index, 'Unknown')}"

    def start(self, operation: str, total: int):
        self.operation = operation
        self.total = total
        self.names.clear()
        self.completed.clear()
        self.failed.clear()
        print(f"{operation}: {total} sheets")

    def start_section(self, index: int, name: str):
        self.names[index] = name
        print(f"  [◉] {self._label(index)}")

    def complete_section(self, index: int):
        self.completed.add(index)
        print(f"  [✓] {self._label(index)}")

    def fail(self, index: int, message: str):
        self.failed[index] = message
        print(f"  [✗] {self._label(index)} ({message})")

    def complete(self):
        mark = "✗" if self.failed else "✓"
        summary = f"[{mark}] {self.operation} complete: {len(self.completed)}/{self.total} sheets"
        if self.failed:
            summary += f", {len(self.failed)} skipped"
        print(summary)
