from nomonic.ignore import IGNORE_FILE, compile_pattern, compile_patterns, is_ignored, load_ignore_patterns


class TestLoadIgnorePatterns:
    def test_missing_file(self, tmp_path):
        assert load_ignore_patterns(tmp_path) == []

    def test_reads_patterns(self, tmp_path):
        (tmp_path / IGNORE_FILE).write_text("drizzle/migrations/**\n*.sql\n")
        assert load_ignore_patterns(tmp_path) == ["drizzle/migrations/**", "*.sql"]

    def test_strips_comments_and_blank_lines(self, tmp_path):
        (tmp_path / IGNORE_FILE).write_text("# This is a comment\n\ndrizzle/**\n  # indented comment\n\nvendor/\n")
        assert load_ignore_patterns(tmp_path) == ["drizzle/**", "vendor/"]

    def test_trims_whitespace(self, tmp_path):
        (tmp_path / IGNORE_FILE).write_text("  foo/**  \n  bar.sql  \n")
        assert load_ignore_patterns(tmp_path) == ["foo/**", "bar.sql"]


class TestCompilePattern:
    def test_filename_glob_matches_at_any_depth(self):
        pat = compile_pattern("*.sql")
        assert pat.search("foo.sql")
        assert pat.search("db/foo.sql")
        assert pat.search("a/b/c/foo.sql")
        assert not pat.search("foo.ts")

    def test_star_does_not_cross_directories(self):
        pat = compile_pattern("drizzle/migrations/*")
        assert pat.search("drizzle/migrations/0001.sql")
        assert pat.search("drizzle/migrations/0002_init.sql")
        assert not pat.search("drizzle/migrations/sub/deep.sql")

    def test_double_star_matches_everything_below(self):
        pat = compile_pattern("drizzle/**")
        assert pat.search("drizzle/migrations/0001.sql")
        assert pat.search("drizzle/schema.ts")
        assert pat.search("drizzle/a/b/c/deep.sql")
        assert pat.search("src/drizzle/foo.ts")

    def test_leading_double_star_spans_zero_or_more_directories(self):
        pat = compile_pattern("**/migrations/*.sql")
        assert pat.search("drizzle/migrations/0001.sql")
        assert pat.search("migrations/0001.sql")
        assert pat.search("a/b/migrations/foo.sql")
        assert not pat.search("migrations/sub/foo.sql")

    def test_leading_slash_anchors_at_root(self):
        pat = compile_pattern("/vendor/*")
        assert pat.search("vendor/lib.js")
        assert not pat.search("src/vendor/lib.js")

    def test_trailing_slash_matches_directory_contents(self):
        pat = compile_pattern("migrations/")
        assert pat.search("migrations/0001.sql")
        assert pat.search("migrations/sub/deep.sql")
        assert pat.search("drizzle/migrations/0001.sql")

    def test_question_mark_matches_one_character(self):
        pat = compile_pattern("file?.txt")
        assert pat.search("file1.txt")
        assert pat.search("fileA.txt")
        assert not pat.search("file12.txt")
        assert not pat.search("file/.txt")

    def test_regex_characters_are_escaped(self):
        pat = compile_pattern("*.config.js")
        assert pat.search("eslint.config.js")
        assert not pat.search("eslintXconfigXjs")
        assert compile_pattern("notes(1).txt").search("docs/notes(1).txt")


class TestIsIgnored:
    def test_no_match(self):
        assert not is_ignored("src/index.ts", compile_patterns(["*.sql", "vendor/**"]))

    def test_any_pattern_matches(self):
        patterns = compile_patterns(["*.sql", "vendor/**"])
        assert is_ignored("db/schema.sql", patterns)
        assert is_ignored("vendor/lib/util.js", patterns)

    def test_leading_dot_slash_is_stripped(self):
        assert is_ignored("./vendor/lib.js", compile_patterns(["/vendor/*"]))

    def test_empty_patterns(self):
        assert not is_ignored("anything.ts", [])
