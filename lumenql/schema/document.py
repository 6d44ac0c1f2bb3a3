from __future__ import annotations

from typing import Dict, FrozenSet, Iterator, List, Optional

from graphql import (
    DefinitionNode,
    DirectiveDefinitionNode,
    DocumentNode,
    FieldDefinitionNode,
    GraphQLSyntaxError,
    InputValueDefinitionNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    TypeDefinitionNode,
    parse,
)

from ..core.utils import replace_node
from ..errors import DefinitionException


def parse_source(source: str) -> DocumentNode:
    try:
        return parse(source, no_location=True)
    except GraphQLSyntaxError as e:
        raise DefinitionException(f"Invalid schema definition: {e.message}") from e


def parse_argument(fragment: str) -> InputValueDefinitionNode:
    """Parse a single argument definition such as ``first: Int! = 10``."""
    doc = parse(f"type _Arguments {{ _field({fragment}): Int }}", no_location=True)
    return doc.definitions[0].fields[0].arguments[0]


_EXTENDED_KINDS = {
    ObjectTypeExtensionNode: ObjectTypeDefinitionNode,
    InterfaceTypeExtensionNode: InterfaceTypeDefinitionNode,
}
_MERGED_EXTENSIONS = tuple(_EXTENDED_KINDS)


class DocumentAST:
    """Mutable, name-indexed view of a schema document while it is compiled.

    Type definitions are keyed by name so that directives can replace a type
    after rewriting one of its fields. Everything that is not a type or a
    directive definition (schema definitions, other extensions) is kept in order.

    Object and interface extensions are merged into the type they extend, so
    directives on extension fields are compiled like any other field.
    ``source_types`` holds the type names written by the schema author.
    """

    def __init__(self):
        self.types: Dict[str, TypeDefinitionNode] = {}
        self.directives: Dict[str, DirectiveDefinitionNode] = {}
        self.other: List[DefinitionNode] = []
        self.source_types: FrozenSet[str] = frozenset()

    @classmethod
    def from_source(cls, *sources: str) -> 'DocumentAST':
        document = cls()
        extensions = []
        for source in sources:
            for definition in parse_source(source).definitions:
                if isinstance(definition, _MERGED_EXTENSIONS):
                    extensions.append(definition)
                else:
                    document.add_definition(definition)
        # Extensions may precede the definition they extend.
        for extension in extensions:
            document.merge_extension(extension)
        document.source_types = frozenset(document.types)
        return document

    def add_definition(self, definition: DefinitionNode) -> None:
        if isinstance(definition, TypeDefinitionNode):
            name = definition.name.value
            if name in self.types:
                raise DefinitionException(f"Duplicate type definition {name!r}", name)
            self.types[name] = definition
        elif isinstance(definition, DirectiveDefinitionNode):
            name = definition.name.value
            if name in self.directives:
                raise DefinitionException(f"Duplicate directive definition @{name}")
            self.directives[name] = definition
        else:
            self.other.append(definition)

    def merge_extension(self, extension: DefinitionNode) -> None:
        """Fold an object or interface extension into its base type.

        Extensions of types defined elsewhere are kept as they are.
        """
        name = extension.name.value
        base = self.types.get(name)
        if not isinstance(base, _EXTENDED_KINDS.get(type(extension), ())):
            self.other.append(extension)
            return
        self.types[name] = replace_node(
            base,
            fields=tuple(base.fields or ()) + tuple(extension.fields or ()),
            interfaces=tuple(base.interfaces or ()) + tuple(extension.interfaces or ()),
            directives=tuple(base.directives or ()) + tuple(extension.directives or ()),
        )

    def add_type_if_absent(self, definition: TypeDefinitionNode) -> bool:
        """Add a generated type unless a type of that name exists already."""
        name = definition.name.value
        if name in self.types:
            return False
        self.types[name] = definition
        return True

    def fields(self, type_name: str) -> Iterator[FieldDefinitionNode]:
        yield from getattr(self.types[type_name], 'fields', None) or ()

    def get_field(self, type_name: str, field_name: str) -> Optional[FieldDefinitionNode]:
        for field in self.fields(type_name):
            if field.name.value == field_name:
                return field
        return None

    def replace_field(self, type_name: str, field: FieldDefinitionNode) -> None:
        type_node = self.types[type_name]
        name = field.name.value
        fields = tuple(field if f.name.value == name else f for f in type_node.fields)
        self.types[type_name] = replace_node(type_node, fields=fields)

    def to_document(self) -> DocumentNode:
        definitions: List[DefinitionNode] = [*self.directives.values(), *self.types.values(), *self.other]
        return DocumentNode(definitions=tuple(definitions))
