"""Window with export buttons, an information pane and an alert pane."""

from __future__ import annotations

from typing import Callable

TITLE = "Scanner con PDF"
BUTTON_LABELS = (
    "Escanear dispositivos",
    "Escanear procesos",
    "Escanear puertos",
    "Escanear todo",
)
PDF_FILENAMES = ("dispositivos.pdf", "procesos.pdf", "puertos.pdf", "todo.pdf")


def report_for_button(index: int, devices: str, processes: str, ports: str) -> str:
    """Return the text that the export button ``index`` writes."""
    if index == 0:
        return devices
    if index == 1:
        return processes
    if index == 2:
        return ports
    return devices + processes + ports


class ScannerWindow:
    """Holds the text of both panes; the widgets are built when :meth:`run` starts.

    ``on_export`` is called with the button index when a button is pressed.
    Callbacks passed to :meth:`schedule` run on the interface thread and keep
    repeating while they return a true value.
    """

    def __init__(self, on_export: Callable[[int], None] | None = None) -> None:
        self.on_export = on_export
        self._info = ""
        self._alerts = ""
        self._root = None
        self._info_view = None
        self._alert_view = None
        self._pending: list[tuple[int, Callable[[], bool]]] = []

    @property
    def info(self) -> str:
        return self._info

    @property
    def alerts(self) -> str:
        return self._alerts

    @staticmethod
    def _insert(view, text: str) -> None:
        if view is not None:
            view.configure(state="normal")
            view.insert("end", text)
            view.configure(state="disabled")

    @staticmethod
    def _erase(view) -> None:
        if view is not None:
            view.configure(state="normal")
            view.delete("1.0", "end")
            view.configure(state="disabled")

    def append_info(self, message: str) -> None:
        """Add text at the end of the information pane."""
        self._info += message
        self._insert(self._info_view, message)

    def append_alert(self, message: str) -> None:
        """Add text at the end of the alert pane."""
        self._alerts += message
        self._insert(self._alert_view, message)

    def clear_info(self) -> None:
        """Empty the information pane."""
        self._info = ""
        self._erase(self._info_view)

    def clear_alert(self) -> None:
        """Empty the alert pane."""
        self._alerts = ""
        self._erase(self._alert_view)

    def schedule(self, interval_ms: int, callback: Callable[[], bool]) -> None:
        """Call ``callback`` every ``interval_ms`` milliseconds while it returns true."""
        if self._root is None:
            self._pending.append((interval_ms, callback))
            return
        root = self._root

        def tick() -> None:
            if callback() and self._root is root:
                root.after(interval_ms, tick)

        root.after(interval_ms, tick)

    def _press(self, index: int) -> None:
        if self.on_export is not None:
            self.on_export(index)

    def _make_view(self, parent, text: str):
        import tkinter as tk

        frame = tk.Frame(parent)
        scrollbar = tk.Scrollbar(frame)
        view = tk.Text(frame, wrap="word", yscrollcommand=scrollbar.set)
        scrollbar.configure(command=view.yview)
        scrollbar.pack(side=tk.RIGHT, fill=tk.Y)
        view.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        view.insert("end", text)
        view.configure(state="disabled")
        return frame, view

    def run(self) -> None:
        """Build the window and run the event loop until it is closed."""
        import tkinter as tk

        root = tk.Tk()
        root.title(TITLE)
        root.geometry("900x600")

        main_pane = tk.PanedWindow(root, orient=tk.HORIZONTAL)
        main_pane.pack(fill=tk.BOTH, expand=True)

        buttons = tk.Frame(main_pane)
        for index, label in enumerate(BUTTON_LABELS):
            tk.Button(buttons, text=label, command=lambda i=index: self._press(i)).pack(
                side=tk.TOP, fill=tk.X, padx=5, pady=5
            )
        main_pane.add(buttons)

        right_pane = tk.PanedWindow(main_pane, orient=tk.HORIZONTAL)
        main_pane.add(right_pane, stretch="always")

        info_frame, self._info_view = self._make_view(right_pane, self._info)
        alert_frame, self._alert_view = self._make_view(right_pane, self._alerts)
        right_pane.add(info_frame, stretch="always")
        right_pane.add(alert_frame, width=850)

        self._root = root
        pending, self._pending = self._pending, []
        for interval_ms, callback in pending:
            self.schedule(interval_ms, callback)
        try:
            root.mainloop()
        finally:
            self._root = None
            self._info_view = None
            self._alert_view = None