"""Pydantic models for the resume document being edited."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Link(BaseModel):
    id: str
    title: str
    url: str


class PersonalInfo(BaseModel):
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    title: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    summary: str = ""  # rich text
    links: list[Link] = []

    model_config = {"populate_by_name": True}

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class ResumeItem(BaseModel):
    id: str
    title: str = ""
    subtitle: str = ""
    date: str = ""
    description: str = ""  # rich text


class ResumeSection(BaseModel):
    id: str
    title: str
    items: list[ResumeItem] = []


class ResumeData(BaseModel):
    personal_info: PersonalInfo = Field(alias="personalInfo")
    sections: list[ResumeSection] = []

    model_config = {"populate_by_name": True}

    def section(self, section_id: str) -> ResumeSection | None:
        """Return the section with the given id, if present."""
        for section in self.sections:
            if section.id == section_id:
                return section
        return None


def default_resume() -> ResumeData:
    """Seed document shown to a first-time user."""
    return ResumeData(
        personal_info=PersonalInfo(
            first_name="John",
            last_name="Doe",
            title="Software Engineer",
            email="john.doe@example.com",
            phone="(555) 123-4567",
            location="San Francisco, CA",
            summary=(
                "Experienced software engineer with a passion for building scalable "
                "web applications and solving complex problems."
            ),
            links=[
                Link(id="link-1", title="LinkedIn", url="https://linkedin.com/in/johndoe"),
                Link(id="link-2", title="GitHub", url="https://github.com/johndoe"),
            ],
        ),
        sections=[
            ResumeSection(
                id="experience",
                title="Work Experience",
                items=[
                    ResumeItem(
                        id="exp-1",
                        title="Senior Software Engineer",
                        subtitle="Tech Company Inc.",
                        date="Jan 2020 - Present",
                        description=(
                            "Led development of a microservices architecture. Improved system "
                            "performance by 40%. Mentored junior developers."
                        ),
                    ),
                    ResumeItem(
                        id="exp-2",
                        title="Software Engineer",
                        subtitle="Startup XYZ",
                        date="Jun 2017 - Dec 2019",
                        description=(
                            "Developed and maintained RESTful APIs. Implemented CI/CD pipelines. "
                            "Collaborated with cross-functional teams."
                        ),
                    ),
                ],
            ),
            ResumeSection(
                id="education",
                title="Education",
                items=[
                    ResumeItem(
                        id="edu-1",
                        title="Master of Computer Science",
                        subtitle="University of Technology",
                        date="2015 - 2017",
                        description=(
                            "Specialized in Artificial Intelligence and Machine Learning. "
                            "GPA: 3.8/4.0"
                        ),
                    ),
                    ResumeItem(
                        id="edu-2",
                        title="Bachelor of Science in Computer Science",
                        subtitle="State University",
                        date="2011 - 2015",
                        description="Dean's List. Participated in ACM programming competitions.",
                    ),
                ],
            ),
            ResumeSection(
                id="skills",
                title="Skills",
                items=[
                    ResumeItem(
                        id="skill-1",
                        title="Programming Languages",
                        subtitle="JavaScript, TypeScript, Python, Java",
                    ),
                    ResumeItem(
                        id="skill-2",
                        title="Frameworks & Libraries",
                        subtitle="React, Node.js, Express, Next.js",
                    ),
                    ResumeItem(
                        id="skill-3",
                        title="Tools & Technologies",
                        subtitle="Git, Docker, AWS, CI/CD, Agile/Scrum",
                    ),
                ],
            ),
        ],
    )
