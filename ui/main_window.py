import tkinter as tk
from tkinter import ttk, filedialog, messagebox

from controllers.table_controller import TableController
from services.file_service import UploadedFile
from ui.table_view import TableView


class MainWindow:
    def __init__(self, controller: TableController = None):
        self.controller = controller or TableController()

        self.window = tk.Tk()
        self.window.title("Visor de Tablas CSV / JSON")
        self.window.geometry("1200x800")
        self.window.protocol("WM_DELETE_WINDOW", self.on_closing)

        self.toolbar = ttk.Frame(self.window, relief=tk.RAISED, borderwidth=1)
        self.toolbar.pack(side="top", fill="x")
        ttk.Button(self.toolbar, text="📂 Abrir archivo", command=self.open_file_action).pack(side="left", padx=5, pady=5)
        self.lbl_file = ttk.Label(self.toolbar, text="Ningún archivo cargado", font=("Arial", 9, "italic"))
        self.lbl_file.pack(side="left", padx=10, pady=5)

        self.status_frame = ttk.Frame(self.window, relief=tk.SUNKEN, padding=(5, 2))
        self.status_frame.pack(side="bottom", fill="x")
        self.lbl_status = ttk.Label(self.status_frame, text="Listo", anchor="w")
        self.lbl_status.pack(side="left", fill="x")
        self.progress = ttk.Progressbar(self.status_frame, mode='indeterminate', length=200)

        self.table = TableView(self.window, self.controller)
        self.table.pack(fill="both", expand=True, padx=10, pady=10)

    def run_task(self, description, func):
        self.window.config(cursor="watch")
        self.lbl_status.config(text=f"⏳ {description}...")
        self.progress.pack(side="right", padx=10)
        self.progress.start(10)
        self.window.update()
        try:
            func()
            self.lbl_status.config(text="✅ Listo")
        except Exception as e:
            self.lbl_status.config(text="❌ Error")
            messagebox.showerror("Error", str(e))
        finally:
            self.progress.stop()
            self.progress.pack_forget()
            self.window.config(cursor="")

    def open_file_action(self):
        paths = filedialog.askopenfilenames(filetypes=[("CSV / JSON", "*.csv *.json"), ("Todos", "*.*")])
        if not paths: return
        self.run_task("Cargando archivo", lambda: self.load_paths(paths))

    def load_paths(self, paths):
        # Solo se usa el primero; el resto de la selección se ignora
        files = [UploadedFile.from_path(paths[0])]
        self.controller.load_file(files)
        self.table.show_table()
        if self.controller.is_error:
            self.lbl_file.config(text="Ningún archivo cargado")
            messagebox.showerror("Error", self.controller.error_message)
        else:
            self.lbl_file.config(text=files[0].name)

    def on_closing(self):
        self.window.destroy()

    def run(self): self.window.mainloop()
