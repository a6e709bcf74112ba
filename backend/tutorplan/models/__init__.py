# Importe tous les modèles pour enregistrer leurs tables dans Base.metadata
# avant que SQLAlchemy tente de résoudre les clés étrangères inter-modèles.
# L'ordre suit la chaîne de propriété : teachers → schools → students → lessons.

from tutorplan.models.teacher import Teacher  # noqa: F401  doit précéder school
from tutorplan.models.school import School  # noqa: F401
from tutorplan.models.student import Student  # noqa: F401
from tutorplan.models.lesson import Lesson  # noqa: F401
from tutorplan.models.comment import Comment  # noqa: F401
from tutorplan.models.coordinate import Coordinate  # noqa: F401
