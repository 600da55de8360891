"""
Interfaz gráfica de la calculadora.

Usa tkinter. Toda la lógica vive en CalculatorController; esta capa solo
dibuja el estado y reenvía las pulsaciones. Los cálculos son síncronos.
"""

import tkinter as tk
from tkinter import font as tkfont

from base_converter import NumberSystem
from calculator_controller import CalculatorController
from keypad import CalculatorMode, PRIMARY, SECONDARY, OPERATOR, SPECIAL
from linear_solver import LinearSystemSpec, MAX_SIZE, MIN_SIZE, solve_linear_spec
from polynomial_solver import MAX_DEGREE, MIN_DEGREE, PolynomialSpec, solve_polynomial_spec
from config import MAX_PRECISION, MIN_PRECISION


class CalculatorApp:
    """Ventana principal de la calculadora."""

    # ── Paleta de colores ────────────────────────────────────────
    C = {
        "bg":           "#1E1E2E",
        "display_bg":   "#181825",
        PRIMARY:        "#313244",
        f"{PRIMARY}_fg":   "#CDD6F4",
        SECONDARY:      "#45475A",
        f"{SECONDARY}_fg": "#CDD6F4",
        OPERATOR:       "#89B4FA",
        f"{OPERATOR}_fg":  "#1E1E2E",
        SPECIAL:        "#A6E3A1",
        f"{SPECIAL}_fg":   "#1E1E2E",
        "expr_fg":      "#BAC2DE",
        "result_fg":    "#A6E3A1",
        "system_fg":    "#89DCEB",
        "error_fg":     "#F38BA8",
    }

    # Teclas físicas que se traducen a tokens del teclado
    KEYBOARD_TOKENS = {
        "Return": "=",
        "KP_Enter": "=",
        "Escape": "AC",
        "BackSpace": "Backspace",
    }

    def __init__(self, root: tk.Tk, controller=None):
        self.root = root
        self.root.title("Calculadora")
        self.root.configure(bg=self.C["bg"])

        self.controller = controller if controller is not None else CalculatorController()

        self._init_fonts()
        self._create_display()
        self._create_mode_bar()
        self._create_base_bar()
        self._keypad_frame = tk.Frame(self.root, bg=self.C["bg"])
        self._keypad_frame.pack(fill="both", expand=True, padx=6, pady=(2, 6))
        self._panel = None
        self._bind_keyboard()
        self._refresh()

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_expr   = tkfont.Font(family="Consolas", size=16)
        self._f_result = tkfont.Font(family="Consolas", size=22, weight="bold")
        self._f_btn    = tkfont.Font(family="Segoe UI", size=15)
        self._f_small  = tkfont.Font(family="Segoe UI", size=11)

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self):
        frame = tk.Frame(self.root, bg=self.C["display_bg"], padx=12, pady=8)
        frame.pack(fill="x", padx=6, pady=(6, 2))

        self.expr_var = tk.StringVar()
        self.result_var = tk.StringVar()
        self.system_var = tk.StringVar()

        tk.Label(frame, textvariable=self.expr_var, font=self._f_expr,
                 bg=self.C["display_bg"], fg=self.C["expr_fg"],
                 anchor="e").pack(fill="x")
        self.result_label = tk.Label(frame, textvariable=self.result_var,
                                     font=self._f_result, bg=self.C["display_bg"],
                                     fg=self.C["result_fg"], anchor="e")
        self.result_label.pack(fill="x")
        tk.Label(frame, textvariable=self.system_var, font=self._f_small,
                 bg=self.C["display_bg"], fg=self.C["system_fg"],
                 anchor="e").pack(fill="x")

    # ── Barras de modo y de base ─────────────────────────────────

    def _small_button(self, parent, text, command):
        return tk.Button(parent, text=text, font=self._f_small,
                         bg=self.C[SECONDARY], fg=self.C[f"{SECONDARY}_fg"],
                         activebackground=self.C[SPECIAL], relief="flat",
                         command=command)

    def _create_mode_bar(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="x", padx=6, pady=2)
        self._mode_buttons = {}
        for mode, text in ((CalculatorMode.BASIC, "Basic"),
                           (CalculatorMode.SCIENTIFIC, "Sci"),
                           (CalculatorMode.BASE, "Base")):
            btn = self._small_button(frame, text, lambda m=mode: self._set_mode(m))
            btn.pack(side="left", expand=True, fill="x", padx=2)
            self._mode_buttons[mode] = btn
        self._small_button(frame, "Σ", self._open_polynomial).pack(side="left", expand=True, fill="x", padx=2)
        self._small_button(frame, "Ax=b", self._open_linear).pack(side="left", expand=True, fill="x", padx=2)
        self._small_button(frame, "⚙", lambda: self._on_key("settings")).pack(side="left", expand=True, fill="x", padx=2)

    def _create_base_bar(self):
        self._base_frame = tk.Frame(self.root, bg=self.C["bg"])
        self._base_buttons = {}
        for system in NumberSystem:
            btn = self._small_button(self._base_frame, system.name,
                                     lambda s=system: self._set_system(s))
            btn.pack(side="left", expand=True, fill="x", padx=2)
            self._base_buttons[system] = btn

    # ── Teclado ──────────────────────────────────────────────────

    def _build_keypad(self):
        for child in self._keypad_frame.winfo_children():
            child.destroy()

        cols = 5 if self.controller.state.mode == CalculatorMode.SCIENTIFIC else 4
        for c in range(5):
            self._keypad_frame.columnconfigure(c, weight=0, uniform="")
        for c in range(cols):
            self._keypad_frame.columnconfigure(c, weight=1, uniform="key")

        row = col = 0
        for desc in self.controller.keys:
            span = 2 if desc.span else 1
            if col + span > cols:
                row, col = row + 1, 0
            btn = tk.Button(
                self._keypad_frame, text=desc.label, font=self._f_btn,
                bg=self.C[desc.variant], fg=self.C[f"{desc.variant}_fg"],
                activebackground=self.C[SPECIAL], relief="flat",
                state="disabled" if desc.disabled else "normal",
                command=lambda k=desc.key: self._on_key(k),
            )
            btn.grid(row=row, column=col, columnspan=span, sticky="nsew",
                     padx=2, pady=2, ipady=6)
            col += span
            if col >= cols:
                row, col = row + 1, 0

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        self.root.bind("<Key>", self._on_keyboard)

    def _on_keyboard(self, event):
        token = self.KEYBOARD_TOKENS.get(event.keysym)
        if token is None and event.char and event.char.isprintable():
            token = event.char
        if token is not None:
            self._on_key(token)

    # ── Acciones ─────────────────────────────────────────────────

    def _on_key(self, key: str):
        self.controller.press(key)
        self._refresh()

    def _set_mode(self, mode):
        self.controller.set_mode(mode)
        self._refresh()

    def _set_system(self, system):
        self.controller.set_number_system(system)
        self._refresh()

    def _refresh(self):
        state = self.controller.state
        self.expr_var.set(state.expression or "0")
        self.result_var.set(state.result or "0")
        self.result_label.config(
            fg=self.C["error_fg"] if state.result == "Error" else self.C["result_fg"]
        )
        self.system_var.set(state.number_system.name)

        for mode, btn in self._mode_buttons.items():
            btn.config(bg=self.C[SPECIAL] if mode == state.mode else self.C[SECONDARY])
        if state.mode == CalculatorMode.BASE:
            self._base_frame.pack(fill="x", padx=6, pady=2, before=self._keypad_frame)
            for system, btn in self._base_buttons.items():
                btn.config(bg=self.C[SPECIAL] if system == state.number_system else self.C[SECONDARY])
        else:
            self._base_frame.pack_forget()

        self._build_keypad()
        self._sync_panel(state.open_panel)

    # ── Paneles: historial, ajustes y logaritmos ─────────────────

    def _sync_panel(self, panel):
        if self._panel is not None:
            self._panel.destroy()
            self._panel = None
        if panel is None:
            return

        top = tk.Toplevel(self.root, bg=self.C["bg"], padx=10, pady=10)
        top.protocol("WM_DELETE_WINDOW", self._close_panel)
        self._panel = top
        if panel == "history":
            self._fill_history(top)
        elif panel == "settings":
            self._fill_settings(top)
        else:
            self._fill_log_choices(top)

    def _close_panel(self):
        self.controller.close_panel()
        self._refresh()

    def _fill_history(self, top):
        top.title("History")
        entries = self.controller.history
        listbox = tk.Listbox(top, width=40, height=15, font=self._f_small)
        listbox.pack(fill="both", expand=True)
        if not entries:
            listbox.insert("end", "No history yet.")
        for entry in entries:
            listbox.insert("end", str(entry))

        def _select(_event):
            selection = listbox.curselection()
            if entries and selection:
                self.controller.select_history(entries[selection[0]])
                self._refresh()

        listbox.bind("<Double-Button-1>", _select)

        def _clear():
            self.controller.clear_history()
            self._refresh()

        self._small_button(top, "Clear History", _clear).pack(fill="x", pady=(6, 0))

    def _fill_settings(self, top):
        top.title("Settings")
        state = self.controller.state
        scale = tk.Scale(top, from_=MIN_PRECISION, to=MAX_PRECISION, orient="horizontal",
                         label="Precision (digits)", length=240,
                         command=lambda v: self.controller.set_precision(int(v)))
        scale.set(state.precision)
        scale.pack(fill="x")

        def _toggle():
            self.controller.toggle_angle_mode()
            self._refresh()

        self._small_button(top, "RAD" if state.is_radians else "DEG", _toggle).pack(fill="x", pady=(6, 0))

    def _fill_log_choices(self, top):
        top.title("Select Logarithm Base")
        choices = (("Base 10: log₁₀(x)", "log10("), ("Natural: ln(x)", "ln("),
                   ("Base 2: log₂(x)", "log2("), ("Custom: log(value, base)", "log("))
        for text, token in choices:
            self._small_button(top, text, lambda t=token: self._insert_log(t)).pack(fill="x", pady=2)

    def _insert_log(self, token: str):
        self.controller.insert_logarithm(token)
        self._refresh()

    # ── Modales de solvers ───────────────────────────────────────

    def _open_polynomial(self):
        PolynomialDialog(self.root, self)

    def _open_linear(self):
        LinearSystemDialog(self.root, self)


class PolynomialDialog:
    """Modal del solver de polinomios."""

    def __init__(self, root, app: CalculatorApp):
        self.app = app
        self.top = tk.Toplevel(root, bg=app.C["bg"], padx=10, pady=10)
        self.top.title("Polynomial Solver")
        self.spec = PolynomialSpec()
        self.degree = tk.Scale(self.top, from_=MIN_DEGREE, to=MAX_DEGREE, orient="horizontal",
                               label="Degree", command=lambda v: self._resize(int(v)))
        self.degree.set(self.spec.degree)
        self.degree.pack(fill="x")
        self.fields = tk.Frame(self.top, bg=app.C["bg"])
        self.fields.pack(fill="x", pady=6)
        self.output = tk.StringVar()
        app._small_button(self.top, "Solve", self._solve).pack(fill="x")
        tk.Label(self.top, textvariable=self.output, justify="left", anchor="w",
                 bg=app.C["bg"], fg=app.C["result_fg"]).pack(fill="x", pady=(6, 0))
        self._draw_fields()

    def _resize(self, degree: int):
        if degree != self.spec.degree:
            self.spec = self.spec.with_degree(degree)
            self.output.set("")
            self._draw_fields()

    def _draw_fields(self):
        for child in self.fields.winfo_children():
            child.destroy()
        self.entries = []
        for col, (label, value) in enumerate(zip(self.spec.labels, self.spec.coefficients)):
            tk.Label(self.fields, text=label, bg=self.app.C["bg"],
                     fg=self.app.C["expr_fg"]).grid(row=0, column=col)
            var = tk.StringVar(value=value)
            tk.Entry(self.fields, textvariable=var, width=6).grid(row=1, column=col, padx=2)
            self.entries.append(var)

    def _solve(self):
        self.spec.coefficients = [var.get() for var in self.entries]
        self.output.set("\n".join(solve_polynomial_spec(self.spec)))


class LinearSystemDialog:
    """Modal del solver de sistemas lineales."""

    def __init__(self, root, app: CalculatorApp):
        self.app = app
        self.top = tk.Toplevel(root, bg=app.C["bg"], padx=10, pady=10)
        self.top.title("Linear System Solver (Ax = b)")
        self.spec = LinearSystemSpec()
        size = tk.Scale(self.top, from_=MIN_SIZE, to=MAX_SIZE, orient="horizontal",
                        label="Variables", command=lambda v: self._resize(int(v)))
        size.set(self.spec.size)
        size.pack(fill="x")
        self.grid = tk.Frame(self.top, bg=app.C["bg"])
        self.grid.pack(fill="x", pady=6)
        self.output = tk.StringVar()
        app._small_button(self.top, "Solve", self._solve).pack(fill="x")
        tk.Label(self.top, textvariable=self.output, justify="left", anchor="w",
                 bg=app.C["bg"], fg=app.C["result_fg"]).pack(fill="x", pady=(6, 0))
        self._draw_cells()

    def _resize(self, size: int):
        if size != self.spec.size:
            self.spec = self.spec.resize(size)
            self.output.set("")
            self._draw_cells()

    def _draw_cells(self):
        for child in self.grid.winfo_children():
            child.destroy()
        n = self.spec.size
        self.matrix_vars = [[tk.StringVar() for _ in range(n)] for _ in range(n)]
        self.vector_vars = [tk.StringVar() for _ in range(n)]
        for i in range(n):
            for j in range(n):
                tk.Entry(self.grid, textvariable=self.matrix_vars[i][j], width=6).grid(row=i, column=j, padx=2, pady=2)
            tk.Label(self.grid, text="|", bg=self.app.C["bg"], fg=self.app.C["expr_fg"]).grid(row=i, column=n)
            tk.Entry(self.grid, textvariable=self.vector_vars[i], width=6).grid(row=i, column=n + 1, padx=2)

    def _solve(self):
        self.spec.matrix = [[var.get() for var in row] for row in self.matrix_vars]
        self.spec.vector = [var.get() for var in self.vector_vars]
        result = solve_linear_spec(self.spec)
        if result.ok:
            self.output.set("\n".join(f"x{k + 1} = {v}" for k, v in enumerate(result.solution)))
        else:
            self.output.set(result.error)
