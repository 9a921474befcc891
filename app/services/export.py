"""
검토가 끝난 문항 목록 내보내기: JSON 덤프, PDF 문서.
"""

import json
from datetime import date
from io import BytesIO
from typing import Sequence

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import KeepTogether, Paragraph, SimpleDocTemplate, Spacer

from app.quiz.prompt import option_letter
from app.schema.models import Question

DEFAULT_TITLE = "Quiz Questions"


def export_filename(extension: str, today: date | None = None) -> str:
    today = today or date.today()
    return f"quiz-questions-{today.isoformat()}.{extension}"


def export_json(questions: Sequence[Question]) -> str:
    data = [q.model_dump(by_alias=True, exclude_none=True) for q in questions]
    return json.dumps(data, ensure_ascii=False, indent=2)


def _escape(text: str) -> str:
    """reportlab Paragraph가 마크업으로 해석하지 않도록 HTML 특수문자 이스케이프."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _styles():
    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(
        name="QuizTitle",
        parent=styles["Heading1"],
        fontSize=18,
        alignment=TA_CENTER,
        spaceAfter=6,
    ))
    styles.add(ParagraphStyle(
        name="QuizMeta",
        parent=styles["Normal"],
        fontSize=9,
        textColor=colors.grey,
        alignment=TA_CENTER,
        spaceAfter=12,
    ))
    styles.add(ParagraphStyle(
        name="QuestionText",
        parent=styles["Normal"],
        fontSize=11,
        leading=14,
        spaceAfter=6,
    ))
    styles.add(ParagraphStyle(
        name="QuizOption",
        parent=styles["Normal"],
        fontSize=10,
        leftIndent=0.8 * cm,
        spaceAfter=2,
    ))
    styles.add(ParagraphStyle(
        name="QuizAnswer",
        parent=styles["Normal"],
        fontSize=10,
        textColor=colors.darkgreen,
        spaceBefore=4,
    ))
    styles.add(ParagraphStyle(
        name="QuizExplanation",
        parent=styles["Normal"],
        fontSize=9,
        textColor=colors.dimgrey,
        spaceAfter=4,
    ))
    return styles


def _answer_text(question: Question) -> str:
    if question.type == "multiple-choice" and question.options:
        idx = int(question.correct_answer)
        return f"{option_letter(idx)}) {question.options[idx]}"
    return str(question.correct_answer)


def export_pdf(
    questions: Sequence[Question],
    title: str = DEFAULT_TITLE,
    today: date | None = None,
) -> BytesIO:
    """
    문항 목록을 여러 페이지 PDF로 렌더링한다.
    문항마다 번호·유형·난이도, 질문, 선택지(A~D), 정답, 해설 순서로 출력한다.
    반환: PDF가 담긴 BytesIO (position 0).
    """
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=2 * cm,
        rightMargin=2 * cm,
        topMargin=2 * cm,
        bottomMargin=2 * cm,
        title=title,
    )
    styles = _styles()
    today = today or date.today()

    story = [
        Paragraph(_escape(title), styles["QuizTitle"]),
        Paragraph(f"Generated on {today.isoformat()} - {len(questions)} questions", styles["QuizMeta"]),
    ]
    for number, q in enumerate(questions, 1):
        block = [
            Paragraph(
                f"<b>{number}. [{q.type} | {q.difficulty}]</b> {_escape(q.question)}",
                styles["QuestionText"],
            )
        ]
        for i, option in enumerate(q.options or []):
            block.append(Paragraph(f"{option_letter(i)}) {_escape(option)}", styles["QuizOption"]))
        block.append(Paragraph(f"<b>Answer:</b> {_escape(_answer_text(q))}", styles["QuizAnswer"]))
        block.append(Paragraph(f"<i>Explanation:</i> {_escape(q.explanation)}", styles["QuizExplanation"]))
        block.append(Spacer(1, 0.4 * cm))
        story.append(KeepTogether(block))

    doc.build(story)
    buffer.seek(0)
    return buffer
