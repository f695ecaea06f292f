"""
Descriptor instances for the three registry pages
"""

from typing import Dict, List

from campus_registry.models.entity import EntityDescriptor, EntityField, FieldType

STUDENTS = EntityDescriptor(
    table="students",
    singular="student",
    plural="students",
    natural_key="student_id",
    fields=[
        EntityField(name="student_id", label="Student ID"),
        EntityField(name="name", label="Name"),
        EntityField(name="email", label="Email"),
        EntityField(name="major", label="Major"),
    ],
)

COURSES = EntityDescriptor(
    table="courses",
    singular="course",
    plural="courses",
    natural_key="course_code",
    fields=[
        EntityField(name="course_code", label="Course code"),
        EntityField(name="name", label="Name"),
        EntityField(name="credit_count", label="Credits", type=FieldType.INTEGER),
        EntityField(name="schedule", label="Schedule"),
    ],
)

PROFESSORS = EntityDescriptor(
    table="professors",
    singular="professor",
    plural="professors",
    natural_key="professor_id",
    fields=[
        EntityField(name="professor_id", label="Professor ID"),
        EntityField(name="name", label="Name"),
        EntityField(name="email", label="Email"),
        EntityField(name="department", label="Department"),
    ],
)

ALL_ENTITIES: List[EntityDescriptor] = [STUDENTS, COURSES, PROFESSORS]


def get_entity_registry() -> Dict[str, EntityDescriptor]:
    """Descriptors keyed by table name"""
    return {entity.table: entity for entity in ALL_ENTITIES}
