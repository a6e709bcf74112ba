"""
Types d'entités de la chaîne de propriété Teacher ▷ School ▷ Student ▷ Lesson.
Sert aussi de clé pour les commentaires et les coordonnées.
"""

from enum import Enum


class EntityKind(str, Enum):
    SCHOOL = "SCHOOL"
    STUDENT = "STUDENT"
    LESSON = "LESSON"
