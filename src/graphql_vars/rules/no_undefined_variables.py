from graphql.language import SKIP, FragmentDefinitionNode, OperationDefinitionNode
from graphql.validation import ASTValidationContext, ASTValidationRule

from ..check_operation import check_operation
from ..fragment_usage_index import FragmentUsageIndex

__all__ = ["NoUndefinedVariablesRule"]


class NoUndefinedVariablesRule(ASTValidationRule):
    """No undefined variables

    A GraphQL operation is only valid if all variables encountered, both directly and
    via fragment spreads, are defined by that operation.

    Every rule instance has its own fragment usage index, so fragments reachable
    from several operations are only expanded once per validation.
    """

    def __init__(self, context: ASTValidationContext) -> None:
        super().__init__(context)
        self.fragment_index = FragmentUsageIndex(context.get_fragment)

    def enter_operation_definition(self, operation: OperationDefinitionNode, *_args):
        for error in check_operation(operation, self.fragment_index):
            self.report_error(error)
        return SKIP

    def enter_fragment_definition(self, _node: FragmentDefinitionNode, *_args):
        return SKIP
