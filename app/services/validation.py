from collections.abc import Mapping, Sequence


def _missing(value) -> bool:
    # 0 is a real value; only absent / empty counts as missing
    return value is None or value == ""


class ValidationService:
    """Checks a raw submission before anything is written."""

    def __init__(self, skills: Sequence[str], max_comment_length: int = 500):
        self.skills = list(skills)
        self.max_comment_length = max_comment_length

    def validate(self, data) -> list[str]:
        """Return every problem found; an empty list means the submission is valid."""
        if not isinstance(data, Mapping):
            return ["Submission must be a JSON object"]

        errors: list[str] = []

        teacher = data.get("teacherEmail", data.get("teacher"))
        if _missing(teacher):
            errors.append("Teacher email is required")

        if _missing(data.get("student")):
            errors.append("Student name is required")

        if _missing(data.get("grade")) and _missing(data.get("percentageMark")):
            errors.append("Grade is required")

        skills = data.get("skills")
        if not isinstance(skills, Mapping):
            errors.append("Learning skills are required")
        else:
            for skill in self.skills:
                if _missing(skills.get(skill)):
                    errors.append(f"{skill} rating is required")

        comment = data.get("comment")
        if _missing(comment):
            errors.append("Comment is required")
        elif len(str(comment)) > self.max_comment_length:
            errors.append(f"Comment must be {self.max_comment_length} characters or less")

        return errors
