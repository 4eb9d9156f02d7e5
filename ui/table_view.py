import tkinter as tk
from tkinter import ttk

from controllers.table_controller import TableController


def yview_to_scroll(first: float, last: float, row_count: int, row_height: int):
    """Convierte las fracciones de yview del Treeview en (scroll_height, client_height, scroll_top)."""
    scroll_height = row_count * row_height
    client_height = (last - first) * scroll_height
    scroll_top = first * scroll_height
    return scroll_height, client_height, scroll_top


class TableView(ttk.Frame):
    ROW_HEIGHT = 20

    def __init__(self, parent, controller: TableController, *args, **kwargs):
        super().__init__(parent, *args, **kwargs)
        self.controller = controller

        control_frame = ttk.Frame(self)
        control_frame.pack(fill="x", pady=(0, 5))
        self.more_btn = ttk.Button(control_frame, text="Mostrar más", command=self._on_more)
        self.more_btn.pack(side="left")
        self.status_label = ttk.Label(control_frame, text="")
        self.status_label.pack(side="right")

        tree_frame = ttk.Frame(self)
        tree_frame.pack(fill="both", expand=True)
        self._tree = ttk.Treeview(tree_frame, show="headings")
        self._tree.pack(side="left", fill="both", expand=True)
        self._scroll_y = ttk.Scrollbar(tree_frame, orient="vertical", command=self._tree.yview)
        self._scroll_y.pack(side="right", fill="y")
        self._tree.configure(yscrollcommand=self._on_yscroll)
        self._scroll_x = ttk.Scrollbar(self, orient="horizontal", command=self._tree.xview)
        self._scroll_x.pack(side="bottom", fill="x")
        self._tree.configure(xscrollcommand=self._scroll_x.set)
        self._rendered = 0

    def _on_yscroll(self, first, last):
        self._scroll_y.set(first, last)
        if not self._rendered:
            return
        if self.controller.check_scroll(*yview_to_scroll(float(first), float(last), self._rendered, self.ROW_HEIGHT)):
            # Diferido: no insertar filas dentro del callback de scroll
            self.after_idle(self.refresh)

    def _on_more(self):
        self.controller.add_more_rows()
        self.refresh()

    def clear(self):
        for r in self._tree.get_children(): self._tree.delete(r)
        self._tree["columns"] = ()
        self._rendered = 0

    def show_table(self):
        """Redibuja desde cero con la tabla actual del controlador."""
        self.clear()
        columns = self.controller.table_data.columns
        if not columns:
            self._update_status()
            return
        self._tree["columns"] = tuple(columns)
        for col in columns:
            self._tree.heading(col, text=col)
            self._tree.column(col, anchor="w", width=180)
        self.refresh()

    def refresh(self):
        # visible_rows solo crece: basta con insertar las filas nuevas
        columns = self.controller.table_data.columns
        for row in self.controller.visible_rows[self._rendered:]:
            safe = ["" if row.get(col) is None else str(row.get(col)) for col in columns]
            self._tree.insert("", "end", values=tuple(safe))
        self._rendered = len(self._tree.get_children())
        self._update_status()

    def _update_status(self):
        total = self.controller.table_data.row_count
        self.status_label.config(text=f"Mostrando {self.controller.current_index} de {total} registros")
        self.more_btn.config(state=tk.NORMAL if self.controller.has_more_rows else tk.DISABLED)
