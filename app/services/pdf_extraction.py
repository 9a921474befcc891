"""
PDF 텍스트 추출 대체 구현.

실제 PDF 파싱 대신 고정된 예시 챕터 텍스트를 돌려준다. 페이지 수는 글자 수로 추정한다.
"""

import math
from dataclasses import dataclass

CHARS_PER_PAGE = 2000

PLACEHOLDER_CHAPTER_TEXT = """
Chapter: Advanced Learning Methodologies and Educational Psychology

Introduction:
This chapter explores modern educational approaches that have revolutionized teaching and learning processes. The content covers active learning strategies, assessment techniques, and the integration of technology in educational environments.

Key Concepts:

1. Active Learning Strategies
Active learning methodologies emphasize student engagement and participation rather than passive information consumption. These approaches include:
- Collaborative learning exercises
- Problem-based learning scenarios
- Interactive discussions and debates
- Hands-on experimentation and discovery
- Peer teaching and knowledge sharing

Research demonstrates that active learning leads to improved retention rates, deeper understanding, and enhanced critical thinking skills. Students who engage with material through active participation show significantly better academic outcomes.

2. Assessment and Evaluation Methods
Modern assessment goes beyond traditional testing to include:
- Formative assessments that provide ongoing feedback
- Portfolio-based evaluations
- Project-based learning assessments
- Peer and self-assessment techniques
- Authentic assessment in real-world contexts

These varied assessment methods help measure not just knowledge retention but also skill application, critical thinking, and problem-solving abilities.

3. Technology Integration
The integration of technology in education creates blended learning environments that:
- Accommodate different learning styles
- Provide personalized learning experiences
- Enable collaborative work across distances
- Offer immediate feedback and adaptive content
- Support multimedia learning resources

4. Research Methodologies in Education
Educational research employs both quantitative and qualitative approaches:
- Quantitative methods provide statistical analysis of learning outcomes
- Qualitative methods offer deep insights into learning experiences
- Mixed-method approaches combine both for comprehensive understanding
- Action research allows educators to study their own teaching practices

5. Metacognitive Development
Developing metacognitive skills helps students:
- Understand their own learning processes
- Monitor their comprehension and progress
- Regulate their learning strategies
- Reflect on their academic performance
- Transfer learning skills across different subjects

Applications and Implications:
These methodologies find application across various educational levels, from elementary education through higher education and professional development. The emphasis on learner-centered approaches, continuous feedback, and technology integration represents a significant shift from traditional educational models.

The chapter concludes with practical implementation strategies for educators seeking to incorporate these methodologies into their teaching practice, along with considerations for institutional support and professional development requirements.
""".strip()


@dataclass
class ExtractedDocument:
    file_name: str
    text: str
    page_count: int


def estimate_page_count(text: str) -> int:
    return max(1, math.ceil(len(text) / CHARS_PER_PAGE))


def extract_text(file_name: str, file_content: str) -> ExtractedDocument:
    """업로드 1건의 텍스트 추출. file_content(base64)는 현재 내용 확인에 쓰이지 않는다."""
    if not file_name or not file_content:
        raise ValueError("fileName and fileContent are required")
    text = PLACEHOLDER_CHAPTER_TEXT
    return ExtractedDocument(file_name=file_name, text=text, page_count=estimate_page_count(text))


def document_text(file_name: str) -> str:
    """문항 생성 코퍼스에 들어갈 파일별 텍스트."""
    return f"Content from file: {file_name}\n\n{PLACEHOLDER_CHAPTER_TEXT}"
