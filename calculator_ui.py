"""
Interfaz gráfica de la calculadora científica.

Usa tkinter. La interfaz solo entrega el texto y el modo angular al
motor y muestra el resultado o el error que este devuelve.
"""

import logging
import tkinter as tk
from tkinter import font as tkfont

from calculator_engine import CalculatorEngine, EvaluationResult
from calculator_errors import NotComputableError
from expression_editing import delete_char, insert_text
from math_functions import AngleMode


logger = logging.getLogger(__name__)


class CalculatorApp:
    """Ventana principal de la calculadora científica."""

    # ── Paletas de colores ───────────────────────────────────────
    THEMES = {
        "dark": {
            "bg":         "#1E1E2E",
            "display_bg": "#181825",
            "num":        "#313244",
            "num_fg":     "#CDD6F4",
            "op":         "#F38BA8",
            "op_fg":      "#1E1E2E",
            "func":       "#45475A",
            "func_fg":    "#CDD6F4",
            "special":    "#585B70",
            "special_fg": "#CDD6F4",
            "equals":     "#89B4FA",
            "equals_fg":  "#1E1E2E",
            "toggle":     "#585B70",
            "toggle_fg":  "#CDD6F4",
            "expr_fg":    "#BAC2DE",
            "result_fg":  "#A6E3A1",
            "error_fg":   "#F38BA8",
        },
        "light": {
            "bg":         "#EFF1F5",
            "display_bg": "#FFFFFF",
            "num":        "#DCE0E8",
            "num_fg":     "#4C4F69",
            "op":         "#D20F39",
            "op_fg":      "#FFFFFF",
            "func":       "#CCD0DA",
            "func_fg":    "#4C4F69",
            "special":    "#BCC0CC",
            "special_fg": "#4C4F69",
            "equals":     "#1E66F5",
            "equals_fg":  "#FFFFFF",
            "toggle":     "#BCC0CC",
            "toggle_fg":  "#4C4F69",
            "expr_fg":    "#5C5F77",
            "result_fg":  "#40A02B",
            "error_fg":   "#D20F39",
        },
    }

    # ── Teclas de funciones (solo en modo ENG) ───────────────────
    #  (texto, inserta)

    FUNCTION_KEYS = [
        [("sin", "sin("), ("cos", "cos("), ("tan", "tan("),
         ("asin", "asin("), ("acos", "acos("), ("atan", "atan(")],
        [("√", "sqrt("), ("ln", "ln("), ("log", "log("),
         ("exp", "exp("), ("abs", "abs("), ("x!", "!")],
        [("floor", "floor("), ("ceil", "ceil("), ("round", "round("),
         ("min", "min("), ("max", "max("), (",", ",")],
        [("x²", "^(2)"), ("π", "π"), ("e", "e"),
         ("pow", "pow("), ("(", "("), (")", ")")],
    ]

    # ── Definiciones del teclado principal ────────────────────────
    #  Cada fila es una lista de (texto, acción, tipo_color)
    #  tipo_color: "num", "op", "special", "equals"

    KEYPAD = [
        [("AC", "clear",     "special"), ("⌫", "backspace", "special"),
         ("^",  "insert:^",  "special"), ("/", "insert:/", "op")],

        [("7",  "insert:7",  "num"), ("8", "insert:8", "num"),
         ("9",  "insert:9",  "num"), ("*", "insert:*", "op")],

        [("4",  "insert:4",  "num"), ("5", "insert:5", "num"),
         ("6",  "insert:6",  "num"), ("-", "insert:-", "op")],

        [("1",  "insert:1",  "num"), ("2", "insert:2", "num"),
         ("3",  "insert:3",  "num"), ("+", "insert:+", "op")],

        [("0",  "insert:0",  "num"), (".",  "insert:.",  "num"),
         ("=",  "equals",    "equals")],
    ]

    # ────────────────────────────────────────────────────────────

    def __init__(self, root: tk.Tk, engine=None, engineering_mode: bool = True,
                 dark_theme: bool = True):
        self.root = root
        self.root.title("Calculadora Científica")
        self.root.resizable(False, False)

        self.engine = engine if engine is not None else CalculatorEngine()
        self._eng_mode = engineering_mode
        self._theme = "dark" if dark_theme else "light"
        self._result_is_error = False
        # (widget, tipo_color) para repintar al cambiar de tema
        self._themed: list[tuple[tk.Widget, str]] = []

        self._init_fonts()
        self._create_toggle_bar()
        self._create_display()
        self._create_function_panel()
        self._create_keypad()
        self._bind_keyboard()

        self._apply_theme()
        self._update_mode_ui()
        self._update_angle_ui()

        # Foco inicial en el campo de expresión
        self.expr_entry.focus_set()

    @property
    def C(self) -> dict:
        return self.THEMES[self._theme]

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_expr   = tkfont.Font(family="Consolas", size=16)
        self._f_result = tkfont.Font(family="Consolas", size=22, weight="bold")
        self._f_btn    = tkfont.Font(family="Segoe UI", size=15)
        self._f_func   = tkfont.Font(family="Segoe UI", size=12)
        self._f_small  = tkfont.Font(family="Segoe UI", size=11)

    # ── Barra de toggles (tema · ENG/STD · RAD/DEG) ──────────────

    def _create_toggle_bar(self):
        frame = tk.Frame(self.root)
        frame.pack(fill="x", padx=6, pady=(6, 2))
        self._themed.append((frame, "bg"))

        self.theme_var = tk.BooleanVar(value=self._theme == "dark")
        self.theme_check = tk.Checkbutton(
            frame, text="Oscuro", variable=self.theme_var,
            font=self._f_small, relief="flat", command=self._toggle_theme,
        )
        self.theme_check.pack(side="left")
        self._themed.append((self.theme_check, "check"))

        self.angle_btn = tk.Button(
            frame, font=self._f_small, width=10, relief="flat",
            command=self._toggle_angle,
        )
        self.angle_btn.pack(side="right", padx=(4, 0))
        self._themed.append((self.angle_btn, "toggle"))

        self.mode_btn = tk.Button(
            frame, font=self._f_small, width=10, relief="flat",
            command=self._toggle_mode,
        )
        self.mode_btn.pack(side="right")
        self._themed.append((self.mode_btn, "toggle"))

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self):
        frame = tk.Frame(self.root, padx=12, pady=8)
        frame.pack(fill="x", padx=6, pady=2)
        self._themed.append((frame, "display"))

        # Campo de expresión (editable)
        self.expr_var = tk.StringVar()
        self.expr_entry = tk.Entry(
            frame, textvariable=self.expr_var, font=self._f_expr,
            relief="flat", justify="right", bd=0,
        )
        self.expr_entry.pack(fill="x", pady=(4, 0))
        self._themed.append((self.expr_entry, "expr"))

        self.result_var = tk.StringVar()
        self.result_label = tk.Label(
            frame, textvariable=self.result_var, font=self._f_result,
            anchor="e",
        )
        self.result_label.pack(fill="x", pady=(2, 4))

    # ── Panel de funciones (modo ENG) ────────────────────────────

    def _create_function_panel(self):
        self.function_frame = tk.Frame(self.root)
        self._themed.append((self.function_frame, "bg"))
        for col in range(6):
            self.function_frame.columnconfigure(col, weight=1, uniform="fn")

        for r, row_def in enumerate(self.FUNCTION_KEYS):
            for col, (text, ins) in enumerate(row_def):
                btn = tk.Button(
                    self.function_frame, text=text, font=self._f_func,
                    relief="flat",
                    command=lambda t=ins: self._on_key(f"insert:{t}"),
                )
                btn.grid(row=r, column=col, sticky="nsew", padx=2, pady=2,
                         ipady=4)
                self._themed.append((btn, "func"))

    # ── Teclado numérico / operadores ────────────────────────────

    def _create_keypad(self):
        self.keypad_frame = tk.Frame(self.root)
        self.keypad_frame.pack(fill="both", expand=True, padx=6, pady=(2, 6))
        self._themed.append((self.keypad_frame, "bg"))

        # Determinar el ancho máximo de las filas
        max_cols = max(len(row) for row in self.KEYPAD)
        for c in range(max_cols):
            self.keypad_frame.columnconfigure(c, weight=1, uniform="key")

        for r, row_def in enumerate(self.KEYPAD):
            # Repartir columnas con colspan para filas cortas
            spans = self._compute_spans(len(row_def), max_cols)
            col_pos = 0
            for idx, (text, action, kind) in enumerate(row_def):
                btn = tk.Button(
                    self.keypad_frame, text=text, font=self._f_btn,
                    relief="flat",
                    command=lambda a=action: self._on_key(a),
                )
                btn.grid(row=r, column=col_pos, columnspan=spans[idx],
                         sticky="nsew", padx=2, pady=2, ipady=8)
                self._themed.append((btn, kind))
                col_pos += spans[idx]

        for r in range(len(self.KEYPAD)):
            self.keypad_frame.rowconfigure(r, weight=1)

    @staticmethod
    def _compute_spans(cols_in_row: int, max_cols: int) -> list[int]:
        """Reparte max_cols entre cols_in_row botones."""
        base, extra = divmod(max_cols, cols_in_row)
        spans = [base] * cols_in_row
        # Asignar columnas extra al último botón (generalmente '=')
        spans[-1] += extra
        return spans

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        self.expr_entry.bind("<Return>", lambda _e: self._calculate())
        self.expr_entry.bind("<KP_Enter>", lambda _e: self._calculate())
        self.root.bind("<Escape>", lambda _e: self._on_key("clear"))

    # ── Acciones ─────────────────────────────────────────────────

    def _on_key(self, action: str):
        if action == "clear":
            self.expr_var.set("")
            self._show_result(EvaluationResult.empty())
        elif action == "backspace":
            self._edit(delete_char)
        elif action == "equals":
            self._calculate()
        elif action.startswith("insert:"):
            text = action[7:]
            self._edit(lambda value, start, end: insert_text(value, start, end, text))
        self.expr_entry.focus_set()

    def _selection(self) -> tuple[int, int]:
        if self.expr_entry.selection_present():
            return (self.expr_entry.index(tk.SEL_FIRST),
                    self.expr_entry.index(tk.SEL_LAST))
        pos = self.expr_entry.index(tk.INSERT)
        return pos, pos

    def _edit(self, operation):
        start, end = self._selection()
        value, cursor = operation(self.expr_var.get(), start, end)
        self.expr_var.set(value)
        self.expr_entry.selection_clear()
        self.expr_entry.icursor(cursor)

    # ── Toggles ──────────────────────────────────────────────────

    def _toggle_angle(self):
        if self.engine.angle_mode is AngleMode.RADIAN:
            self.engine.set_angle_mode(AngleMode.DEGREE)
        else:
            self.engine.set_angle_mode(AngleMode.RADIAN)
        self._update_angle_ui()
        self.expr_entry.focus_set()

    def _update_angle_ui(self):
        self.angle_btn.config(text=f"Modo: {self.engine.angle_mode.value.upper()}")

    def _toggle_mode(self):
        self._eng_mode = not self._eng_mode
        self._update_mode_ui()
        self.expr_entry.focus_set()

    def _update_mode_ui(self):
        if self._eng_mode:
            self.function_frame.pack(fill="x", padx=6, pady=2,
                                     before=self.keypad_frame)
        else:
            self.function_frame.pack_forget()
        self.mode_btn.config(text="Modo: ENG" if self._eng_mode else "Modo: STD")

    def _toggle_theme(self):
        self._theme = "dark" if self.theme_var.get() else "light"
        logger.debug("Tema: %s", self._theme)
        self._apply_theme()

    def _apply_theme(self):
        c = self.C
        self.root.configure(bg=c["bg"])
        for widget, kind in self._themed:
            if kind == "bg":
                widget.config(bg=c["bg"])
            elif kind == "display":
                widget.config(bg=c["display_bg"])
            elif kind == "expr":
                widget.config(bg=c["display_bg"], fg=c["expr_fg"],
                              insertbackground=c["expr_fg"])
            elif kind == "check":
                widget.config(bg=c["bg"], fg=c["toggle_fg"],
                              activebackground=c["bg"],
                              selectcolor=c["display_bg"])
            else:
                widget.config(bg=c[kind], fg=c[f"{kind}_fg"],
                              activebackground=c["special"])
        self._paint_result()

    # ── Cálculo ──────────────────────────────────────────────────

    def _calculate(self):
        result = self.engine.evaluate(self.expr_var.get())
        self._show_result(result)

    def _show_result(self, result: EvaluationResult):
        text = result.display_text()
        # "No se puede calcular" se muestra tal cual, sin prefijo
        if result.error is not None and not isinstance(result.error, NotComputableError):
            text = f"Error: {text}"
        self._result_is_error = result.error is not None
        self.result_var.set(text)
        self._paint_result()

    def _paint_result(self):
        c = self.C
        fg = c["error_fg"] if self._result_is_error else c["result_fg"]
        self.result_label.config(bg=c["display_bg"], fg=fg)
