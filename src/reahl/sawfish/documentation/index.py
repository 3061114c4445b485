import html
import logging
import os
import re
import threading


API_DOCS_PATH_ENVIRONMENT_NAME = 'SAWFISH_API_DOCS_PATH'
DOCUMENT_SUFFIXES = ('.htm', '.html')

FILE_NAME_MATCH_SCORE = 10
CONTENT_OCCURRENCE_SCORE = 0.5
INTERFACE_DOCUMENT_BOOST = 1.5
CANDIDATE_CUTOFF_FACTOR = 3

DESCRIPTION_MAXIMUM_LENGTH = 500
SYNTAX_MAXIMUM_LENGTH = 1000
REMARKS_MAXIMUM_LENGTH = 1000
EXAMPLE_DESCRIPTION_MAXIMUM_LENGTH = 300
TRUNCATION_MARKER = '...'

EXAMPLE_FILE_NAME_MARKERS = ('_example_', '_csharp')

SECTION_PATTERN_TEMPLATES = (
    r'<h[234]>\s*%s\s*</h[234]>\s*<[^>]+>([^<]+)',
    r'<strong>\s*%s\s*[:\s]*</strong>([^<]+)',
    r'%s:\s*</[^>]+>\s*<[^>]+>([^<]+)',
)
INTERFACE_DECLARATION_PATTERN = re.compile(
    r'interface\s+([A-Z][a-zA-Z0-9]+)',
    re.IGNORECASE,
)
FIRST_PARAGRAPH_PATTERN = re.compile(
    r'<p[^>]*>(.+?)</p>',
    re.IGNORECASE | re.DOTALL,
)
PREFORMATTED_BLOCK_PATTERN = re.compile(
    r'<pre[^>]*>(.*?)</pre>',
    re.IGNORECASE | re.DOTALL,
)
CODE_BLOCK_PATTERN = re.compile(
    r'<code[^>]*>(.*?)</code>',
    re.IGNORECASE | re.DOTALL,
)
HTML_TAG_PATTERN = re.compile(r'<[^>]+>')
WHITESPACE_PATTERN = re.compile(r'\s+')


def documentation_path_from_environment():
    return os.environ.get(API_DOCS_PATH_ENVIRONMENT_NAME, '').strip() or None


class DocRecord:
    def __init__(
        self,
        interface_name,
        member_name,
        description,
        syntax,
        remarks,
        file_path,
        relevance_score=0.0,
    ):
        self.interface_name = interface_name
        self.member_name = member_name
        self.description = description
        self.syntax = syntax
        self.remarks = remarks
        self.file_path = file_path
        self.relevance_score = relevance_score

    def with_relevance_score(self, relevance_score):
        return self.__class__(
            self.interface_name,
            self.member_name,
            self.description,
            self.syntax,
            self.remarks,
            self.file_path,
            relevance_score=relevance_score,
        )

    def as_documentation(self):
        return {
            'interfaceName': self.interface_name,
            'methodName': self.member_name,
            'description': self.description,
            'syntax': self.syntax,
            'remarks': self.remarks,
        }

    def as_search_result(self):
        search_result = self.as_documentation()
        search_result['relevanceScore'] = self.relevance_score
        search_result['filePath'] = self.file_path
        return search_result


class CodeExample:
    def __init__(self, title, description, language, code, file_path):
        self.title = title
        self.description = description
        self.language = language
        self.code = code
        self.file_path = file_path

    def as_dict(self):
        return {
            'title': self.title,
            'description': self.description,
            'language': self.language,
            'code': self.code,
            'filePath': self.file_path,
        }


def file_name_of(document_path):
    return os.path.basename(document_path)


def file_stem_of(document_path):
    return os.path.splitext(file_name_of(document_path))[0]


def is_example_file(document_path):
    lowercase_file_name = file_name_of(document_path).lower()
    return any(
        marker in lowercase_file_name for marker in EXAMPLE_FILE_NAME_MARKERS
    )


def relevance_score(content, document_path, query_terms):
    lowercase_content = content.lower()
    lowercase_file_name = file_name_of(document_path).lower()
    score = 0.0
    for query_term in query_terms:
        if query_term in lowercase_file_name:
            score += FILE_NAME_MATCH_SCORE
        score += lowercase_content.count(query_term) * CONTENT_OCCURRENCE_SCORE
    if (
        lowercase_file_name.startswith('i')
        and 'example' not in lowercase_file_name
    ):
        score *= INTERFACE_DOCUMENT_BOOST
    return score


def strip_html_tags(html_text):
    text = HTML_TAG_PATTERN.sub(' ', html_text)
    text = WHITESPACE_PATTERN.sub(' ', text)
    return html.unescape(text)


def code_text(html_block):
    # tags are dropped without collapsing whitespace, so code keeps its lines
    return html.unescape(HTML_TAG_PATTERN.sub('', html_block)).strip()


def truncated(text, maximum_length):
    if len(text) > maximum_length:
        return text[:maximum_length] + TRUNCATION_MARKER
    return text


def extract_interface_name(file_stem, html_text):
    if file_stem.startswith('I') and '_' in file_stem:
        return file_stem.split('_')[0]
    match = INTERFACE_DECLARATION_PATTERN.search(html_text)
    if match:
        return match.group(1)
    return file_stem


def extract_member_name(file_stem):
    parts = file_stem.split('_')
    if len(parts) >= 2 and 'Example' not in parts[1]:
        return parts[1]
    return ''


def extract_section(html_text, section_name, maximum_length):
    for pattern_template in SECTION_PATTERN_TEMPLATES:
        match = re.search(
            pattern_template % re.escape(section_name),
            html_text,
            re.IGNORECASE | re.DOTALL,
        )
        if match:
            return truncated(
                strip_html_tags(match.group(1)).strip(),
                maximum_length,
            )
    return ''


def extract_first_paragraph(html_text, maximum_length):
    match = FIRST_PARAGRAPH_PATTERN.search(html_text)
    if not match:
        return ''
    return truncated(strip_html_tags(match.group(1)).strip(), maximum_length)


def parse_doc_record(html_text, document_path):
    file_stem = file_stem_of(document_path)
    description = extract_section(
        html_text,
        'Description',
        DESCRIPTION_MAXIMUM_LENGTH,
    ) or extract_first_paragraph(html_text, DESCRIPTION_MAXIMUM_LENGTH)
    return DocRecord(
        extract_interface_name(file_stem, html_text),
        extract_member_name(file_stem),
        description,
        extract_section(html_text, 'Syntax', SYNTAX_MAXIMUM_LENGTH),
        extract_section(html_text, 'Remarks', REMARKS_MAXIMUM_LENGTH),
        document_path,
    )


def parse_code_example(html_text, document_path):
    code_match = PREFORMATTED_BLOCK_PATTERN.search(
        html_text
    ) or CODE_BLOCK_PATTERN.search(html_text)
    code = code_text(code_match.group(1)) if code_match else ''
    return CodeExample(
        file_stem_of(document_path).replace('_', ' '),
        extract_first_paragraph(html_text, EXAMPLE_DESCRIPTION_MAXIMUM_LENGTH),
        'csharp' if 'csharp' in file_name_of(document_path).lower() else 'vb',
        code,
        document_path,
    )


class DocumentationIndex:
    """Ranked search over the SolidWorks API help corpus.

    The corpus is scanned once, on first use, and file contents are
    cached for the lifetime of the process. A missing corpus directory
    gives an empty index.

    search() stops reading files once it has collected three times
    max_results matching candidates. This bounds latency on the full
    corpus, but a better match further down the file list is then never
    seen.
    """

    def __init__(self, docs_path=None):
        self.docs_path = docs_path
        self.document_paths = None
        self.scan_count = 0
        self.build_lock = threading.Lock()
        self.contents_lock = threading.Lock()
        self.contents_by_path = {}

    def ensure_indexed(self):
        if self.document_paths is None:
            with self.build_lock:
                if self.document_paths is None:
                    self.document_paths = self.scan_corpus()
        return self.document_paths

    def scan_corpus(self):
        self.scan_count += 1
        if not self.docs_path or not os.path.isdir(self.docs_path):
            logging.getLogger(__name__).warning(
                'Documentation path not found: %s',
                self.docs_path,
            )
            return []
        document_paths = []
        for directory_path, directory_names, file_names in os.walk(
            self.docs_path
        ):
            directory_names.sort()
            for file_name in sorted(file_names):
                if file_name.lower().endswith(DOCUMENT_SUFFIXES):
                    document_paths.append(
                        os.path.join(directory_path, file_name)
                    )
        logging.getLogger(__name__).debug(
            'Indexed %s documentation files under %s',
            len(document_paths),
            self.docs_path,
        )
        return document_paths

    def content_of(self, document_path):
        with self.contents_lock:
            content = self.contents_by_path.get(document_path)
        if content is not None:
            return content
        with open(document_path, encoding='utf-8', errors='replace') as document_file:
            content = document_file.read()
        with self.contents_lock:
            return self.contents_by_path.setdefault(document_path, content)

    def readable_content_of(self, document_path):
        try:
            return self.content_of(document_path)
        except OSError as error:
            logging.getLogger(__name__).warning(
                'Error reading %s: %s',
                document_path,
                error,
            )
            return None

    def search(self, query, max_results=10):
        if max_results <= 0:
            return []
        query_terms = query.lower().split()
        if not query_terms:
            return []
        candidates = []
        for document_path in self.ensure_indexed():
            content = self.readable_content_of(document_path)
            if content is None:
                continue
            score = relevance_score(content, document_path, query_terms)
            if score > 0:
                candidates.append(
                    parse_doc_record(content, document_path).with_relevance_score(
                        score
                    )
                )
            if len(candidates) >= max_results * CANDIDATE_CUTOFF_FACTOR:
                break
        candidates.sort(
            key=lambda doc_record: doc_record.relevance_score,
            reverse=True,
        )
        return candidates[:max_results]

    def lookup(self, interface_name, member_name=None):
        if member_name:
            return self.lookup_member(interface_name, member_name)
        return self.lookup_interface(interface_name)

    def lookup_interface(self, interface_name):
        for doc_record in self.search(interface_name, 5):
            if doc_record.interface_name.lower() == interface_name.lower():
                return doc_record
        return None

    def lookup_member(self, interface_name, member_name):
        for doc_record in self.search('%s %s' % (interface_name, member_name), 5):
            if (
                doc_record.interface_name.lower() == interface_name.lower()
                and doc_record.member_name.lower() == member_name.lower()
            ):
                return doc_record
        return None

    def examples(self, query, max_results=5):
        if max_results <= 0:
            return []
        lowercase_query = query.lower()
        code_examples = []
        for document_path in self.ensure_indexed():
            if not is_example_file(document_path):
                continue
            content = self.readable_content_of(document_path)
            if content is None or lowercase_query not in content.lower():
                continue
            code_example = parse_code_example(content, document_path)
            if code_example.code:
                code_examples.append(code_example)
            if len(code_examples) >= max_results:
                break
        return code_examples
