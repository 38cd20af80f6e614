from __future__ import annotations

from logging import getLogger
from typing import List, Optional, Sequence, Type

from graphql.error import GraphQLError
from graphql.language import DocumentNode, ParallelVisitor, visit
from graphql.validation import ASTValidationContext, ASTValidationRule

from .rules import NoUndefinedVariablesRule

__all__ = ["ValidationAbortedError", "validate_variables"]

logger = getLogger(__name__)


class ValidationAbortedError(RuntimeError):
    """Error when a validation has been aborted (error limit reached)."""


def validate_variables(
    document_ast: DocumentNode,
    max_errors: Optional[int] = None,
    rules: Optional[Sequence[Type[ASTValidationRule]]] = None,
) -> List[GraphQLError]:
    """Check that all operations of a document define the variables they use.

    The operations are checked in document order and the errors found for each of
    them are concatenated. No schema is needed for this check.

    Validation stops after ``max_errors`` errors if a limit has been specified, with
    a last error telling that the validation has been aborted.

    Other AST validation rules that do not need a schema can be passed in ``rules``
    to run them in the same pass; by default only the undefined variables rule runs.
    """
    if not document_ast or not isinstance(document_ast, DocumentNode):
        raise TypeError("You must provide a document node.")
    if rules is None:
        rules = [NoUndefinedVariablesRule]
    elif not isinstance(rules, (list, tuple)):
        raise TypeError("Rules must be passed as a list/tuple.")
    if max_errors is not None and max_errors < 0:
        raise ValueError("The maximum number of errors must not be negative.")

    errors: List[GraphQLError] = []

    def on_error(error: GraphQLError) -> None:
        if max_errors is not None and len(errors) >= max_errors:
            errors.append(
                GraphQLError(
                    "Too many validation errors, error limit reached."
                    " Validation aborted."
                )
            )
            raise ValidationAbortedError
        errors.append(error)

    context = ASTValidationContext(document_ast, on_error)
    visitors = [rule(context) for rule in rules]
    try:
        visit(document_ast, ParallelVisitor(visitors))
    except ValidationAbortedError:
        logger.debug("Validation aborted after %d errors.", max_errors)
    else:
        logger.debug("Validation finished with %d errors.", len(errors))
    return errors
