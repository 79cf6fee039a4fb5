"""Project decoded language definitions onto the storage row schema."""

from collections.abc import Iterable

from pydantic import BaseModel

from domain.catalog.models import CatalogRow, LanguageDefinition, LanguageType, Nullable, text_or_absent
from domain.errors import ProjectionError

_CATEGORY_BY_NAME: dict[str, LanguageType] = {member.value: member for member in LanguageType}


class ProjectionPolicy(BaseModel):
    """
    Opt-in switches that reproduce how older loads populated the table.

    - interpreters_from_filenames: fill the interpreters column with the
      filenames list.
    - programming_as_data: store the "programming" category as "data".

    Both default to off; the projection then stores what the catalog says.
    """

    interpreters_from_filenames: bool = False
    programming_as_data: bool = False


def project_category(definition: LanguageDefinition, policy: ProjectionPolicy) -> Nullable[LanguageType]:
    """
    Map the catalog category onto the storage enumeration.

    Raises:
        ProjectionError: For a non-empty category outside the known vocabulary
    """
    raw = definition.type
    if not raw:
        return Nullable[LanguageType](value=LanguageType.DATA, present=False)

    category = _CATEGORY_BY_NAME.get(raw)
    if category is None:
        raise ProjectionError(definition.name, raw)
    if category is LanguageType.PROGRAMMING and policy.programming_as_data:
        category = LanguageType.DATA
    return Nullable[LanguageType](value=category, present=True)


def project_language(definition: LanguageDefinition, policy: ProjectionPolicy | None = None) -> CatalogRow:
    """Convert one LanguageDefinition into a CatalogRow."""
    policy = policy or ProjectionPolicy()

    interpreters = definition.filenames if policy.interpreters_from_filenames else definition.interpreters

    return CatalogRow(
        name=definition.name,
        fs_name=text_or_absent(definition.fs_name),
        type=project_category(definition, policy),
        aliases=list(definition.aliases),
        ace_mode=text_or_absent(definition.ace_mode),
        codemirror_mode=text_or_absent(definition.codemirror_mode),
        codemirror_mime_type=text_or_absent(definition.codemirror_mime_type),
        # Never absent; a missing flag is false
        wrap=Nullable[bool](value=definition.wrap, present=True),
        extensions=list(definition.extensions),
        filenames=list(definition.filenames),
        interpreters=list(interpreters),
        language_id=definition.language_id,
        color=text_or_absent(definition.color),
        tm_scope=text_or_absent(definition.tm_scope),
        group=text_or_absent(definition.group),
    )


def project_catalog(
    definitions: Iterable[LanguageDefinition],
    policy: ProjectionPolicy | None = None,
) -> list[CatalogRow]:
    """Project every definition, preserving order. Stops at the first ProjectionError."""
    return [project_language(d, policy) for d in definitions]
