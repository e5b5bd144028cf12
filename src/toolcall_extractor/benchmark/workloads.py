"""Sample model outputs grouped by syntax, for benchmarks."""

FENCED_CALLS = [
    'Sure!\n```tool_call\n{"name": "search_legs", "arguments": {"from": "Nice"}}\n```',
    '```json\n{"name": "get_weather", "arguments": {"city": "Brest", "days": 3}}\n```',
    '```tool_code\nsearch_legs(departure="Nice", arrival="Corsica", max_days=5)\n```',
    'Updating your profile.\n```json\n{"full_name": "Jane", "skills": ["navigation"]}\n```',
]

TAGGED_CALLS = [
    '<tool_call>{"name": "api_call", "arguments": {"endpoint": "/users"}}</tool_call>',
    '<tool_call>{"name": "step1", "arguments": {}}</tool_call>\n<tool_call>{"name": "step2", "arguments": {}}</tool_call>',
    '<tool_call><function=search_legs><parameter=from>Nice</parameter></function></tool_call>',
    'Looking now. <function=get_weather><parameter=city>Oban</parameter></function>',
]

DELIMITER_CALLS = [
    '<|tool_calls_start|>{"name": "search_legs", "arguments": {"from": "Nice"}}<|tool_calls_end|>',
    '<|tool_call_start|>[search_legs(departure="Nice"), get_weather(city="Nice")]<|tool_call_end|>',
    '<|tool_call_start|>[{"name": "a", "arguments": {}}, {"name": "b", "arguments": {}}]<|tool_call_end|>',
    '<|start|>assistant<|channel|>commentary<|message|>{"name": "search_legs", "arguments": {}}<|call|>',
]

INLINE_AND_BARE_CALLS = [
    'Let me check. tool_call {"name": "get_weather", "arguments": {"city": "Cork"}}',
    '{"name": "search_legs", "arguments": {"from": "Nice"}}',
    'Here you go: {"name": "calc", "arguments": {"x": 5}} Done!',
]

MALFORMED_CALLS = [
    '```tool_call\n{"name": "f", "arguments": {"x": 1,\n```',
    'tool_call {"name": "f", "arguments": {"note": "cut off',
    "```tool_call\n{'name': 'f', 'arguments': {'x': 1}}\n```",
]

PROSE_ONLY = [
    "Ireland (the island) has a rugged west coast worth sailing in summer.",
    "The function print(x) writes x; nothing else happens here.",
    "Here is some code:\n```python\ndef add(a, b):\n    return a + b\n```",
    "No tools needed, the weather looks fine for tomorrow.",
]

ADVERSARIAL = [
    "```json\n" + "[" * 500 + "\n```",
    "tool_call {" + '"name": "x", "arguments": {"a": "' + "\\" * 200,
    "(" * 2000 + "search(" + ")" * 10,
    "<tool_call>" * 200,
    '{"name": "deep", "arguments": ' + '{"a": ' * 200 + "1" + "}" * 200 + "}",
    "```tool_call\n" + "x=" * 1000 + "\n```",
]

WORKLOADS: dict[str, list[str]] = {
    "Fenced": FENCED_CALLS,
    "Tagged": TAGGED_CALLS,
    "Delimiter tokens": DELIMITER_CALLS,
    "Inline / bare JSON": INLINE_AND_BARE_CALLS,
    "Malformed": MALFORMED_CALLS,
    "Prose only": PROSE_ONLY,
    "Adversarial": ADVERSARIAL,
}
