"""
Jinja2 templates for generated Swift.

Blocks are rendered at zero indentation; nested declarations are indented
by the enclosing template with the ``indent`` filter.
"""

from ..core.templates import TemplateEngine, create_template_engine

FILE_HEADER_TEMPLATE = """\
// DO NOT EDIT.
// swift-format-ignore-file
//
// Generated by the Swift generator plugin for the protocol buffer compiler.
// Source: {{ source }}
//
// For information on using the generated types, please see the documentation:
//   https://github.com/apple/swift-protobuf/

"""

ENUM_TEMPLATE = """\
{{ comments }}{{ visibility }}enum {{ name }}: {{ runtime }}.Enum {
  {{ visibility }}typealias RawValue = Int
{% for case in cases %}
{% if case.comments %}
{{ case.comments | indent }}{% endif %}
  case {{ case.name }} // = {{ case.number }}
{% endfor %}
{% if not closed %}
  case UNRECOGNIZED(Int)
{% endif %}

  {{ visibility }}init() {
    self = .{{ default_case }}
  }

  {{ visibility }}init?(rawValue: Int) {
    switch rawValue {
{% for case in cases %}
    case {{ case.number }}: self = .{{ case.name }}
{% endfor %}
{% if closed %}
    default: return nil
{% else %}
    default: self = .UNRECOGNIZED(rawValue)
{% endif %}
    }
  }

  {{ visibility }}var rawValue: Int {
    switch self {
{% for case in cases %}
    case .{{ case.name }}: return {{ case.number }}
{% endfor %}
{% if not closed %}
    case .UNRECOGNIZED(let i): return i
{% endif %}
    }
  }

}
"""

ENUM_CASE_ITERABLE_TEMPLATE = """\

{% if guards %}
#if swift(>=4.2)

{% endif %}
extension {{ full_name }}: CaseIterable {
{% if closed %}
  // Support synthesized by the compiler.
{% else %}
  // The compiler won't synthesize support with the UNRECOGNIZED case.
  {{ visibility }}static let allCases: [{{ full_name }}] = [
{% for case in cases %}
    .{{ case.name }},
{% endfor %}
  ]
{% endif %}
}
{% if guards %}

#endif  // swift(>=4.2)
{% endif %}
"""

ENUM_RUNTIME_TEMPLATE = """\

extension {{ full_name }}: {{ runtime }}._ProtoNameProviding {
  {{ visibility }}static let _protobuf_nameMap: {{ runtime }}._NameMap = [
{% for entry in name_map %}
    {{ entry }},
{% endfor %}
  ]
}
"""

FIELD_TEMPLATE = """\
{% if has_presence %}
{{ comments }}{{ visibility }}var {{ name }}: {{ swift_type }} {
  get {return {{ storage }} ?? {{ default }}}
  set {{ '{' }}{{ storage }} = newValue}
}
/// Returns true if `{{ name }}` has been explicitly set.
{{ visibility }}var {{ has_name }}: Bool {return self.{{ storage }} != nil}
/// Clears the value of `{{ name }}`. Subsequent reads from it will return its default value.
{{ visibility }}mutating func {{ clear_name }}() {self.{{ storage }} = nil}
{% else %}
{{ comments }}{{ visibility }}var {{ name }}: {{ swift_type }} = {{ default }}
{% endif %}
"""

MESSAGE_TEMPLATE = """\
{{ comments }}{{ visibility }}struct {{ name }} {
  // {{ runtime }}.Message conformance is added in an extension below. See the
  // `Message` and `Message+*Additions` files in the SwiftProtobuf library for
  // methods supported on all messages.
{% for field in fields %}

{{ field | indent }}
{% endfor %}

  {{ visibility }}var unknownFields = {{ runtime }}.UnknownStorage()
{% for declaration in nested %}

{{ declaration | indent }}
{% endfor %}

  {{ visibility }}init() {}
{% if storage %}

{% for line in storage %}
  {{ line }}
{% endfor %}
{% endif %}
}
"""

MESSAGE_RUNTIME_TEMPLATE = """\

extension {{ full_name }}: {{ runtime }}.Message, {{ runtime }}._MessageImplementationBase, {{ runtime }}._ProtoNameProviding {
  {{ visibility }}static let protoMessageName: String = {{ proto_message_name }}
{% if name_map %}
  {{ visibility }}static let _protobuf_nameMap: {{ runtime }}._NameMap = [
{% for entry in name_map %}
    {{ entry }},
{% endfor %}
  ]
{% else %}
  {{ visibility }}static let _protobuf_nameMap = {{ runtime }}._NameMap()
{% endif %}

  {{ visibility }}mutating func decodeMessage<D: {{ runtime }}.Decoder>(decoder: inout D) throws {
{% if decode_cases %}
    while let fieldNumber = try decoder.nextFieldNumber() {
      switch fieldNumber {
{% for case in decode_cases %}
      {{ case }}
{% endfor %}
      default: break
      }
    }
{% else %}
    while let _ = try decoder.nextFieldNumber() {
    }
{% endif %}
  }

  {{ visibility }}func traverse<V: {{ runtime }}.Visitor>(visitor: inout V) throws {
{% for block in traverse %}
{{ block | indent(4) }}
{% endfor %}
    try unknownFields.traverse(visitor: &visitor)
  }

  {{ visibility }}static func ==(lhs: {{ full_name }}, rhs: {{ full_name }}) -> Bool {
{% for name in compared %}
    if lhs.{{ name }} != rhs.{{ name }} {return false}
{% endfor %}
    if lhs.unknownFields != rhs.unknownFields {return false}
    return true
  }
}
"""

EXTENSION_ACCESSOR_TEMPLATE = """\
{{ comments }}{{ visibility }}var {{ property }}: {{ swift_type }} {
  get {return getExtensionValue(ext: {{ declaration }}) ?? {{ default }}}
  set {setExtensionValue(ext: {{ declaration }}, value: newValue)}
}
{% if not repeated %}
/// Returns true if extension `{{ declaration }}`
/// has been explicitly set.
{{ visibility }}var {{ has_name }}: Bool {
  return hasExtensionValue(ext: {{ declaration }})
}
/// Clears the value of extension `{{ declaration }}`.
/// Subsequent reads from it will return its default value.
{{ visibility }}mutating func {{ clear_name }}() {
  clearExtensionValue(ext: {{ declaration }})
}
{% endif %}
"""

MESSAGE_EXTENSIONS_TEMPLATE = """\

extension {{ extendee }} {
{% for accessor in accessors %}

{{ accessor | indent }}
{% endfor %}

}
"""

EXTENSION_REGISTRY_TEMPLATE = """\

/// A `{{ runtime }}.SimpleExtensionMap` that includes all of the extensions defined by
/// this .proto file. It can be used any place an `{{ runtime }}.ExtensionMap` is needed
/// in parsing, or it can be combined with other `{{ runtime }}.SimpleExtensionMap`s to create
/// a larger `{{ runtime }}.SimpleExtensionMap`.
{{ visibility }}let {{ registry_name }}: {{ runtime }}.SimpleExtensionMap = [
{% for name in declarations %}
  {{ name }},
{% endfor %}
]
"""

EXTENSION_DECLARATIONS_TEMPLATE = """\

// Extension Objects - The only reason these might be needed is when manually
// constructing a `SimpleExtensionMap`, otherwise, use the above _Extension Properties_
// accessors for the extension fields on the messages directly.
{% for declaration in declarations %}

{{ declaration.comments }}{{ visibility }}let {{ declaration.name }} = {{ runtime }}.MessageExtension<{{ declaration.field_type }}, {{ declaration.extendee }}>(
  _protobuf_fieldNumber: {{ declaration.number }},
  fieldName: "{{ declaration.proto_name }}"
)
{% endfor %}
"""

SWIFT_TEMPLATES = {
    "file_header.swift": FILE_HEADER_TEMPLATE,
    "enum.swift": ENUM_TEMPLATE,
    "enum_case_iterable.swift": ENUM_CASE_ITERABLE_TEMPLATE,
    "enum_runtime.swift": ENUM_RUNTIME_TEMPLATE,
    "field.swift": FIELD_TEMPLATE,
    "message.swift": MESSAGE_TEMPLATE,
    "message_runtime.swift": MESSAGE_RUNTIME_TEMPLATE,
    "extension_accessor.swift": EXTENSION_ACCESSOR_TEMPLATE,
    "message_extensions.swift": MESSAGE_EXTENSIONS_TEMPLATE,
    "extension_registry.swift": EXTENSION_REGISTRY_TEMPLATE,
    "extension_declarations.swift": EXTENSION_DECLARATIONS_TEMPLATE,
}

_swift_engine = None


def get_swift_template_engine() -> TemplateEngine:
    """Get the shared template engine with the Swift templates loaded."""
    global _swift_engine
    if _swift_engine is None:
        _swift_engine = create_template_engine(SWIFT_TEMPLATES)
    return _swift_engine
