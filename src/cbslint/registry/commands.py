"""
Built-in CBS command table.

Every command the engine understands, as declarative signatures. Optional
and repeating parameters are stated explicitly; the bracketed signature
labels are display text only.
"""

from cbslint.registry.signatures import CommandSignature, Deprecation, ParameterSpec


def _param(label: str, optional: bool = False, documentation: str | None = None) -> ParameterSpec:
    return ParameterSpec(label=label, optional=optional, documentation=documentation)


def _command(
    name: str,
    label: str,
    description: str,
    *parameters: ParameterSpec,
    aliases: tuple[str, ...] = (),
    variadic: bool = False,
    is_prefix: bool = False,
    deprecated: Deprecation | None = None,
) -> CommandSignature:
    return CommandSignature(
        name=name,
        aliases=aliases,
        signature_label=label,
        description=description,
        parameters=parameters,
        variadic=variadic,
        is_prefix=is_prefix,
        is_block=name.startswith("#"),
        deprecated=deprecated,
    )


def _value(name: str, description: str, aliases: tuple[str, ...] = ()) -> CommandSignature:
    """Parameterless data command such as {{user}}."""
    return _command(name, name, description, aliases=aliases)


def _unary(name: str, description: str, label: str = "A", **kwargs) -> CommandSignature:
    return _command(name, f"{name}::A", description, _param(label), **kwargs)


def _binary(
    name: str, description: str, first: str = "A", second: str = "B", **kwargs
) -> CommandSignature:
    return _command(name, f"{name}::A::B", description, _param(first), _param(second), **kwargs)


def _spread(name: str, description: str, first: str, rest: str, **kwargs) -> CommandSignature:
    """Command taking one value followed by any number of further values."""
    return _command(
        name,
        f"{name}::A::[B...]",
        description,
        _param(first),
        _param(rest, optional=True),
        variadic=True,
        **kwargs,
    )


DATA_COMMANDS = [
    _value("user", "Replaced with the persona's name."),
    _value("char", "Replaced with the character's name.", aliases=("bot",)),
    _value("personality", "Replaced with the character's personality.", aliases=("char_persona",)),
    _value("description", "Replaced with the character's description.", aliases=("char_desc",)),
    _value("example_dialogue", "Replaced with an array of example dialogue.", aliases=("example_message",)),
    _value("persona", "Replaced with the persona's description.", aliases=("user_persona",)),
    _value("lorebook", "Replaced with array of lorebook entries.", aliases=("world_info",)),
    _command(
        "history",
        "history::[role]",
        "Replaced with array of messages in current chat.",
        _param("role", optional=True, documentation="Includes the role before each message."),
        aliases=("messages",),
    ),
    _value("chat_index", "Replaced with the index of the message in the chat."),
    _value("model", "Replaced with the current model id."),
    _value("axmodel", "Replaced with the current auxiliary model id."),
    _value("role", "Replaced with the current role of the message sender."),
    _value("maxcontext", "Replaced with the maximum context tokens setting."),
    _value("lastmessage", "Replaced with the last message in the chat log."),
    _value("lastmessageid", "Replaced with the index of the last message.", aliases=("lastmessageindex",)),
    _value("previous_char_chat", "Replaced with the last message of the current character.", aliases=("lastcharmessage",)),
    _value("previous_user_chat", "Replaced with the last message of the user.", aliases=("lastusermessage",)),
    _unary("previous_chat_log", "Replaced with the chat message with the index A.", label="A (index)"),
    _value("first_msg_index", "Replaced with the index of the first message."),
    _value("screen_width", "Replaced with the width of the screen in pixels."),
    _value("screen_height", "Replaced with the height of the screen in pixels."),
    _value("user_history", "Replaced with the array of messages of the user.", aliases=("user_messages",)),
    _value("char_history", "Replaced with the array of messages of the character.", aliases=("char_messages",)),
    _value("scenario", "Replaced with the character's scenario."),
    _value("main_prompt", "Replaced with the main/system prompt.", aliases=("system_prompt",)),
    _value("jailbreak", "Replaced with the jailbreak prompt.", aliases=("jb",)),
    _value("global_note", "Replaced with the user jailbreak/global note.", aliases=("ujb", "system_note")),
]

TIME_COMMANDS = [
    _value("time", "Replaced with the current time (HH:MM:SS)."),
    _value("date", "Replaced with the current date (YYYY-MM-DD)."),
    _command(
        "datetimeformat",
        "datetimeformat::A::[B]",
        "Replaced with the current date/time formatted by A, optionally using timestamp B.",
        _param("A (format string)"),
        _param("B (timestamp)", optional=True, documentation="Unix timestamp in ms."),
        aliases=("date_time_format",),
    ),
    _value("isotime", "Replaced with the current time in UTC (HH:MM:SS)."),
    _value("isodate", "Replaced with the current date in UTC (YYYY-MM-DD)."),
    _value("message_time", "Replaced with the time when the message was sent."),
    _value("message_date", "Replaced with the date when the message was sent."),
    _value("message_idle_duration", "Replaced with the idle duration between user messages."),
    _value("idle_duration", "Replaced with the idle duration since the last user message."),
    _value("message_unixtime_array", "Replaced with the array of unix timestamps (ms) of the chat log."),
    _value("unixtime", "Replaced with the current Unix timestamp (seconds)."),
]

ASSET_COMMANDS = [
    _unary("asset", "Replaced with the asset element named A.", label="A (asset name)"),
    _unary("emotion", "Replaced with the emotion image element named A.", label="A (emotion name)"),
    _unary("audio", "Replaced with the audio element named A.", label="A (asset name)"),
    _unary("bg", "Replaced with the background image element named A.", label="A (asset name)"),
    _unary("video", "Replaced with the video element named A.", label="A (asset name)"),
    _unary("video-img", "Replaced with the video element displayed as image named A.", label="A (asset name)"),
    _unary("raw", "Replaced with the raw asset path data named A.", label="A (asset name)"),
    _unary("image", "Replaced with the image element named A.", label="A (asset name)"),
    _unary("img", "Replaced with the unstyled image element named A.", label="A (asset name)"),
    _unary(
        "path",
        "Replaced with the raw asset path data named A.",
        label="A (asset name)",
        deprecated=Deprecation(message="'path' duplicates 'raw'.", replacement="raw"),
    ),
    _unary("bgm", "Inserts a hidden element to play background music asset A.", label="A (asset name)"),
    _unary("inlay", "Replaced with the inlay asset element named A.", label="A (inlay ID)"),
    _unary("inlayed", "Replaced with the inlay asset element named A, wrapped in a div.", label="A (inlay ID)"),
    _unary(
        "inlayeddata",
        "Replaced with the inlay asset element named A, wrapped in a div.",
        label="A (inlay ID)",
        deprecated=Deprecation(message="'inlayeddata' duplicates 'inlayed'.", replacement="inlayed"),
    ),
    _value("assetlist", "Replaced with the array of names of additional assets."),
    _value("emotionlist", "Replaced with the array of names of emotion images."),
    _unary("source", "Replaced with the path of the icon (char or user).", label='A ("char" or "user")'),
    _unary("module_assetlist", "Replaced with the array of asset names for module A.", label="A (module namespace)"),
]

MATH_COMMANDS = [
    _command(
        "?",
        "? A",
        "Replaced with the result of the calculation A.",
        _param("A (expression)"),
        aliases=("calc",),
        is_prefix=True,
    ),
    _binary("equal", "Returns 1 if A equals B, else 0."),
    _binary("not_equal", "Returns 1 if A is not equal to B, else 0.", aliases=("notequal",)),
    _binary("remaind", "Replaced with the remainder of A divided by B."),
    _binary("greater", "Returns 1 if A > B, else 0."),
    _binary("greater_equal", "Returns 1 if A >= B, else 0.", aliases=("greaterequal",)),
    _binary("less", "Returns 1 if A < B, else 0."),
    _binary("less_equal", "Returns 1 if A <= B, else 0.", aliases=("lessequal",)),
    _binary("and", "Returns 1 if A and B are 1, else 0."),
    _binary("or", "Returns 1 if A or B is 1, else 0."),
    _binary("pow", "Replaced with A raised to the power of B.", first="A (base)", second="B (exponent)"),
    _unary("not", "Returns 1 if A is 0, else 0."),
    _unary("floor", "Replaced with the largest integer <= A."),
    _unary("ceil", "Replaced with the smallest integer >= A."),
    _unary("abs", "Replaced with the absolute value of A."),
    _unary("round", "Replaced with A rounded to the nearest integer."),
    _spread("min", "Replaced with the smallest value among parameters.", "A (value or array)", "B (values)"),
    _spread("max", "Replaced with the largest value among parameters.", "A (value or array)", "B (values)"),
    _spread("sum", "Replaced with the sum of parameters.", "A (value or array)", "B (values)"),
    _spread("average", "Replaced with the average of parameters.", "A (value or array)", "B (values)"),
    _binary(
        "fix_number",
        "Replaced with A fixed to B decimal places.",
        first="A (number)",
        second="B (decimal places)",
        aliases=("fixnum", "fix_num"),
    ),
    _unary("hash", "Replaced with a consistent hash-based number derived from string A.", label="A (string)"),
]

STRING_COMMANDS = [
    _binary("startswith", "Returns 1 if A starts with B, else 0.", first="A (string)", second="B (prefix)"),
    _binary("endswith", "Returns 1 if A ends with B, else 0.", first="A (string)", second="B (suffix)"),
    _binary("contains", "Returns 1 if A contains B, else 0.", first="A (string)", second="B (substring)"),
    _unary("lower", "Replaced with A converted to lowercase.", label="A (string)"),
    _unary("upper", "Replaced with A converted to uppercase.", label="A (string)"),
    _unary("capitalize", "Replaced with A with the first letter capitalized.", label="A (string)"),
    _unary("trim", "Replaced with A with leading/trailing whitespace removed.", label="A (string)"),
    _command(
        "unicode_encode",
        "unicode_encode::A::[B]",
        "Replaced with A encoded to unicode number.",
        _param("A (string)"),
        _param("B (index)", optional=True, documentation="Defaults to 0"),
        aliases=("unicodeencode",),
    ),
    _unary("unicode_decode", "Replaced with A decoded from unicode number.", label="A (number)", aliases=("unicodedecode",)),
]

CONDITION_COMMANDS = [
    _value("prefill_supported", "Returns 1 if the model supports prefilling, else 0."),
    _value("jbtoggled", "Returns 1 if jailbreak is enabled, else 0."),
    _value(
        "isfirstmsg",
        "Returns 1 if the message is the first message, else 0.",
        aliases=("is_first_msg", "is_first_message", "isfirstmessage"),
    ),
    _spread("all", "Returns 1 if all parameters are 1, else 0.", "A (value or array)", "B (values)"),
    _spread("any", "Returns 1 if any parameter is 1, else 0.", "A (value or array)", "B (values)"),
    _unary("module_enabled", "Returns 1 if module A is enabled, else 0.", label="A (module namespace)"),
]

VARIABLE_COMMANDS = [
    _unary("getvar", "Replaced with the value of chat variable A.", label="A (variable name)"),
    _binary("setvar", "Sets chat variable A to B.", first="A (variable name)", second="B (value)"),
    _binary("addvar", "Increments chat variable A by B.", first="A (variable name)", second="B (increment value)"),
    _binary("settempvar", "Sets temporary variable A to B.", first="A (variable name)", second="B (value)"),
    _unary("gettempvar", "Replaced with the value of temporary variable A.", label="A (variable name)", aliases=("tempvar",)),
    _unary("getglobalvar", "Replaced with the value of global variable A.", label="A (variable name)"),
    _binary(
        "setdefaultvar",
        "Sets chat variable A to B only if A does not exist.",
        first="A (variable name)",
        second="B (value)",
    ),
]

COLLECTION_COMMANDS = [
    _spread(
        "array",
        "Creates an array from parameters.",
        "A (element)",
        "B (elements)",
        aliases=("makearray", "a", "make_array"),
    ),
    _unary("array_length", "Replaced with the length of array A.", label="A (array)", aliases=("arraylength",)),
    _binary(
        "array_element",
        "Replaced with the element of array A at index B.",
        first="A (array)",
        second="B (index)",
        aliases=("arrayelement",),
    ),
    _binary(
        "array_push",
        "Replaced with array A with element B pushed.",
        first="A (array)",
        second="B (element)",
        aliases=("arraypush",),
    ),
    _unary("array_pop", "Replaced with array A with the last element removed.", label="A (array)", aliases=("arraypop",)),
    _unary("array_shift", "Replaced with array A with the first element removed.", label="A (array)", aliases=("arrayshift",)),
    _command(
        "array_splice",
        "array_splice::A::B::C::[D...]",
        "Replaced with array A with elements D inserted/deleted at index B for C count.",
        _param("A (array)"),
        _param("B (index)"),
        _param("C (delete count)"),
        _param("D (elements to insert)", optional=True),
        aliases=("arraysplice",),
        variadic=True,
    ),
    _command(
        "array_assert",
        "array_assert::A::B::C",
        "Replaced with array A with element C inserted at index B.",
        _param("A (array)"),
        _param("B (index)"),
        _param("C (element)"),
        aliases=("arrayassert",),
    ),
    _binary("split", "Splits string A by separator B into an array.", first="A (string)", second="B (separator)"),
    _binary("join", "Joins array A with separator B into a string.", first="A (array)", second="B (separator)"),
    _binary("filter", "Filters array A based on option B.", first="A (array)", second="B (option: nonempty, unique, all)"),
    _command(
        "dict",
        "dict::key1=value1::[key2=value2...]",
        "Creates a dictionary.",
        _param("key=value pairs"),
        aliases=("object", "o", "d", "makedict", "make_dict", "makeobject", "make_object"),
        variadic=True,
    ),
    _binary(
        "dict_element",
        "Replaced with the value of key B in dictionary A.",
        first="A (dictionary)",
        second="B (key)",
        aliases=("object_element", "dictelement", "objectelement"),
    ),
    _command(
        "dict_assert",
        "dict_assert::A::B::C",
        "Replaced with dictionary A with key B and value C inserted.",
        _param("A (dictionary)"),
        _param("B (key)"),
        _param("C (value)"),
        aliases=("object_assert", "dictassert", "objectassert"),
    ),
    _command(
        "element",
        "element::A::B::[C...]",
        "Access nested element in JSON object/array A using path B, C...",
        _param("A (JSON object/array)"),
        _param("B (key/index)"),
        _param("C (nested keys/indices)", optional=True),
        aliases=("ele",),
        variadic=True,
    ),
]

UTILITY_COMMANDS = [
    _value("slot", "Replaced with the original slot content in prompt templates."),
    _unary(
        "slot",
        "Replaced with the current element of an #each block, identified by name A.",
        label="A (item variable name from #each)",
    ),
    _unary("position", "Replaced with lorebook content at position pt_A.", label="A (position name)"),
    _command(
        "random",
        "random:A,[B...]",
        "Replaced with a random value from parameters.",
        _param("A, B... (values)"),
        variadic=True,
        is_prefix=True,
    ),
    _command(
        "pick",
        "pick:A,[B...]",
        "Consistent random value from parameters for the same message.",
        _param("A, B... (values)"),
        variadic=True,
        is_prefix=True,
    ),
    _command("roll", "roll:A", "Random number between 1 and A.", _param("A (max value or dX)"), is_prefix=True),
    _command(
        "rollp",
        "rollp:A",
        "Consistent random number between 1 and A for the same message.",
        _param("A (max value or dX)"),
        is_prefix=True,
    ),
    _unary("spread", "Joins array A with :: for use in other syntaxes.", label="A (array)"),
    _command(
        "replace",
        "replace::A::B::C",
        "Replaced with A with all B replaced by C.",
        _param("A (text)"),
        _param("B (search)"),
        _param("C (replace)"),
    ),
    _unary("range", "Creates an array of numbers from array A.", label="A (array: [count] or [start, end, step?])"),
    _unary("length", "Replaced with the length of string A.", label="A (string)"),
    _value("none", "Replaced with an empty string.", aliases=("blank",)),
    _value("br", "Replaced with a line break.", aliases=("newline",)),
    _unary("tonumber", "Trims non-numeric characters from A.", label="A (string)"),
    _unary("return", "Halts processing for the current CBS scope and returns value A.", label="A (value)"),
    _unary("arg", "Used within #func blocks. Replaced with argument at index A.", label="A (argument index)"),
    _binary("button", "Creates a button with label A triggering action B.", first="A (label)", second="B (trigger action)"),
    _command(
        "risu",
        "risu::[A]",
        "Displays the RisuAI logo with optional size A.",
        _param("A (size in px)", optional=True),
    ),
    _binary("file", "Displays filename A, contains base64 data B.", first="A (filename)", second="B (base64 data)"),
    _unary("calc", "Replaced with the result of the calculation A.", label="A (expression)"),
    _command("reverse", "reverse:A", "Reverses the string A.", _param("A (string)"), is_prefix=True),
    _command("comment", "comment:A", "A comment block, ignored unless displaying.", _param("A (comment text)"), is_prefix=True),
    _command("hidden_key", "hidden_key:A", "Internal key, ignored by the parser.", _param("A (key text)"), is_prefix=True),
    _spread("call", "Calls a previously defined #func block A with arguments B, C...", "A (function name)", "B (arguments)"),
    _value(":else", "Starts the alternative branch of the enclosing conditional block."),
]

BLOCK_COMMANDS = [
    _command(
        "#if",
        "#if condition",
        "Conditional block. Content is processed if condition is true (1).",
        _param("condition"),
    ),
    _command(
        "#if_pure",
        "#if_pure condition",
        "Conditional block preserving whitespace.",
        _param("condition"),
        deprecated=Deprecation(
            message="Whitespace-preserving conditionals are written with #when.",
            replacement="#when::keep::condition",
        ),
    ),
    _command(
        "#when",
        "#when::[operator::]condition",
        "Conditional block with optional operators such as keep, not or is.",
        _param("condition"),
        variadic=True,
    ),
    _command(
        "#each",
        "#each array [as item]",
        "Loop block over an array.",
        _param("array"),
        _param("item", optional=True),
    ),
    _command(
        "#func",
        "#func functionName [arg1] [arg2]...",
        "Defines a function block.",
        _param("functionName"),
        _param("arg", optional=True),
        variadic=True,
    ),
    _command(
        "#pure_display",
        "#pure_display",
        "Displays content without formatting or CBS parsing.",
        aliases=("#puredisplay",),
    ),
    _command("#pure", "#pure", "Preserves whitespace and prevents CBS parsing within the block."),
]

BUILTIN_COMMANDS: list[CommandSignature] = [
    *DATA_COMMANDS,
    *TIME_COMMANDS,
    *ASSET_COMMANDS,
    *MATH_COMMANDS,
    *STRING_COMMANDS,
    *CONDITION_COMMANDS,
    *VARIABLE_COMMANDS,
    *COLLECTION_COMMANDS,
    *UTILITY_COMMANDS,
    *BLOCK_COMMANDS,
]
