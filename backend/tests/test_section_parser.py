from services.section_parser import (
    extract_contact_info,
    extract_experience_years,
    match_section_header,
    parse_sections,
)


SAMPLE_RESUME = """John Doe
john.doe@email.com | (555) 123-4567
linkedin.com/in/johndoe | github.com/johndoe | www.johndoe.dev

Summary
Experienced software engineer with 5+ years building web applications.

Experience
Senior Software Engineer | TechCorp | 2021 - Present
• Built REST APIs serving 1M requests/day

Software Engineer | StartupXYZ | 2019 - 2021
• Developed React frontend components

Education
B.S. Computer Science | State University | 2019

Skills
Python, JavaScript, React, Docker, AWS, PostgreSQL, Git
"""


def test_parse_sections_detects_all():
    sections = parse_sections(SAMPLE_RESUME)
    assert "summary" in sections
    assert "experience" in sections
    assert "education" in sections
    assert "skills" in sections
    assert "header" in sections


def test_following_paragraphs_stay_in_section():
    sections = parse_sections(SAMPLE_RESUME)
    experience = "\n".join(sections["experience"])
    assert "TechCorp" in experience
    assert "StartupXYZ" in experience
    assert "Computer Science" in "\n".join(sections["education"])


def test_header_paragraph_on_its_own():
    text = "Jane Roe\n\nSKILLS:\n\nPython, Go"
    sections = parse_sections(text)
    assert sections["skills"] == ["Python, Go"]


def test_long_line_is_not_a_header():
    line = "Experience building distributed systems at scale for many years"
    assert match_section_header(line) is None


def test_no_headers_only_header_bucket():
    sections = parse_sections("Just some prose.\n\nAnother paragraph of prose.")
    assert list(sections) == ["header"]


def test_extract_contact_info():
    contact = extract_contact_info(SAMPLE_RESUME)
    assert contact["email"] == "john.doe@email.com"
    assert contact["phone"] == "(555) 123-4567"
    assert contact["linkedin"] == "https://linkedin.com/in/johndoe"
    assert contact["github"] == "https://github.com/johndoe"
    assert contact["website"] == "https://www.johndoe.dev"


def test_year_ranges_are_not_phone_numbers():
    contact = extract_contact_info("Worked 2019 - 2021 and 2021 - 2023")
    assert contact["phone"] is None


def test_extract_experience_years_explicit():
    assert extract_experience_years("I have 7+ years of experience in Python") == 7.0


def test_extract_experience_years_from_ranges():
    years = extract_experience_years("Engineer\nJan 2018 - Jan 2020\nAnalyst\n2020 - 2021")
    assert years == 3.0


def test_extract_experience_years_none():
    assert extract_experience_years("No dates here") == 0.0
