"""
Rendering Context

Responsibilities:
- Compiles LaTeX to PDF in an isolated temporary directory
- Validates compilation success
- Handles LaTeX errors and provides diagnostic information

Owns: LaTeX compilation, PDF generation
Never: Modifies template content
"""

from autoresume.contexts.rendering.compiler import CompilationResult, compile_latex, render_pdf

__all__ = ["CompilationResult", "compile_latex", "render_pdf"]
