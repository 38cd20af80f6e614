from graphql.language import parse

from graphql_vars import FragmentUsageIndex, validate_variables


def build_document(
    num_operations: int,
    num_fragments: int,
    cyclic: bool = False,
    spreads_per_fragment: int = 1,
):
    operations = [
        f"query Op{i}($v0: Int, $v{i % num_fragments}: Int) {{ ...Frag0 }}"
        for i in range(num_operations)
    ]
    fragments = [
        f"fragment Frag{i} on T {{ field(v: $v{i}) {{"
        + f" ...Frag{i + 1}" * spreads_per_fragment
        + " } }"
        for i in range(num_fragments - 1)
    ]
    last = num_fragments - 1
    fragments.append(
        f"fragment Frag{last} on T {{ field(v: $v{last})"
        + (" { ...Frag0 } }" if cyclic else " }")
    )
    return parse("\n".join(operations + fragments))


def test_validate_operations_sharing_fragments(benchmark):
    document = build_document(100, 50)
    errors = benchmark(lambda: validate_variables(document))
    # every operation defines two of the fifty variables
    assert len(errors) == 100 * 48 + 2


def test_validate_operations_sharing_cyclic_fragments(benchmark):
    document = build_document(100, 50, cyclic=True)
    errors = benchmark(lambda: validate_variables(document))
    assert len(errors) == 100 * 48 + 2


def test_validate_deep_fragment_chain(benchmark):
    document = build_document(10, 2000)
    errors = benchmark(lambda: validate_variables(document))
    assert len(errors) == 10 * 1998 + 1


def test_expand_long_fragment_cycle_from_every_fragment(benchmark):
    document = build_document(1, 100, cyclic=True)

    def expand_all():
        index = FragmentUsageIndex.from_document(document)
        return [len(index.usages_of(f"Frag{i}")) for i in range(100)]

    assert benchmark(expand_all) == [100] * 100


def test_expand_cycle_with_repeated_spreads(benchmark):
    # the back edge is cut below the first fragment, so its usage is not repeated
    fragments = "\n".join(
        f"fragment Frag{i} on T {{ ...Frag{i + 1} ...Frag{i + 1} }}"
        for i in range(1, 59)
    )
    document = parse(
        "fragment Frag0 on T { field(v: $v0) ...Frag1 }\n"
        f"{fragments}\nfragment Frag59 on T {{ ...Frag0 }}"
    )

    def expand_all():
        index = FragmentUsageIndex.from_document(document)
        return [len(index.usages_of(f"Frag{i}")) for i in (0, 59)]

    assert benchmark(expand_all) == [1, 1]
