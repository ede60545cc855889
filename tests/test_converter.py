from prosetex.core.config import DocumentConfig
from prosetex.core.converter import LatexConverter, convert


PREAMBLE = "\n".join(
    [
        "\\documentclass[12pt]{article}",
        "\\usepackage{amsmath}",
        "\\usepackage{amssymb}",
        "\\usepackage{amsthm}",
        "\\usepackage{geometry}",
        "\\geometry{margin=1in}",
    ]
)


def _body(latex: str) -> list[str]:
    start = latex.index("\\begin{document}") + len("\\begin{document}")
    end = latex.index("\\end{document}")
    return latex[start:end].strip("\n").split("\n")


def test_heading_produces_full_document() -> None:
    expected = PREAMBLE + "\n\n\\begin{document}\n\n\\section{Title}\n\n\\end{document}"
    assert convert("# Title") == expected


def test_blank_input_yields_empty_string() -> None:
    assert convert("") == ""
    assert convert("   \n\t\n") == ""


def test_document_markers_appear_once() -> None:
    latex = convert("Hello\n\nWorld")
    assert latex.count("\\begin{document}") == 1
    assert latex.count("\\end{document}") == 1
    assert latex.endswith("\\end{document}")


def test_heading_levels() -> None:
    body = _body(convert("# One\n## Two\n### Three\n#Four"))
    assert body == [
        "\\section{One}",
        "\\subsection{Two}",
        "\\subsubsection{Three}",
        "#Four",
    ]


def test_lines_are_stripped_before_classification() -> None:
    assert _body(convert("   # Indented   ")) == ["\\section{Indented}"]


def test_empty_lines_are_preserved() -> None:
    assert _body(convert("a\n\nb")) == ["a", "", "b"]


def test_theorem_and_proof_environments() -> None:
    body = _body(convert("Theorem: x squared\nProof: trivial\nQED"))
    assert body == [
        "\\begin{theorem}",
        "$$x^2$$",
        "\\begin{proof}",
        "trivial",
        "\\end{proof}",
    ]


def test_theorem_is_left_open_without_closer() -> None:
    latex = convert("Theorem: anything")
    assert "\\begin{theorem}" in latex
    assert "\\end{theorem}" not in latex


def test_closers_are_case_insensitive() -> None:
    body = _body(convert("THEOREM: a\nEnd Theorem\nproof: b\nEND PROOF"))
    assert body == [
        "\\begin{theorem}",
        "a",
        "\\end{theorem}",
        "\\begin{proof}",
        "b",
        "\\end{proof}",
    ]


def test_equation_block_is_self_closing() -> None:
    body = _body(convert("Equation: E equals m c squared"))
    assert body == ["\\begin{equation}", "E = m $$c^2$$", "\\end{equation}"]


def test_math_phrases_apply_to_plain_lines() -> None:
    assert _body(convert("a over b")) == ["$\\frac{a}{b}$"]


def test_custom_preamble() -> None:
    document = DocumentConfig(
        document_class="report", class_options=[], packages=["amsmath"], geometry=None
    )
    latex = LatexConverter(document).convert("Hi")
    assert latex.startswith("\\documentclass{report}\n\\usepackage{amsmath}\n\n\\begin{document}")
    assert "\\geometry" not in latex


def test_custom_math_callable() -> None:
    converter = LatexConverter(math=str.upper)
    assert _body(converter.convert("x squared")) == ["X SQUARED"]


def test_qed_closes_proof_but_not_theorem() -> None:
    latex = convert("Theorem: x > 0\nProof: trivial\nQED")
    assert "\\begin{theorem}\nx > 0\n\\begin{proof}\ntrivial\n\\end{proof}" in latex
    assert "\\end{theorem}" not in latex
