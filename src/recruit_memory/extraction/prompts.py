"""
Prompt templates for vision OCR.
"""

OCR_TRANSCRIPTION_PROMPT = """Transcribe ALL text in this CV/resume document.
Return the text exactly as it appears, keeping the original order and section structure.
Include every section: personal details, education, work experience, skills, projects, certifications and languages.
Do not summarise, translate, correct or add anything."""
