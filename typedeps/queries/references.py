"""Direct references query."""

from ..models import TypeRef, ReferencesResult
from .base import Query


class ReferencesQuery(Query[ReferencesResult]):
    """List the types a type directly references and who references it."""

    def execute(self, type_ref: TypeRef) -> ReferencesResult:
        """Execute the references query.

        Referrers only include types whose references were computed in this
        context so far, so the list grows as more types are analyzed.

        Raises:
            TypeUnresolved: If the type cannot be described.
        """
        references = self.context.direct_references(type_ref)
        return ReferencesResult(
            target=type_ref,
            references=sorted(references),
            referrers=sorted(self.graph.referrers(type_ref)),
        )
