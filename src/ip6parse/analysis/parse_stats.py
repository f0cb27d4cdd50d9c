from ip6parse.analysis.errors import ParseStatus, error_position, is_syntax_error


class ParseStatistics:

    def __init__(self):
        self.stats = {
            'total': 0,
            'parsed': 0,
            'failed': 0,
            'errors': {},
            'bad_chars': {},
        }

    def update(self, text, status):
        self.stats['total'] += 1

        if status == ParseStatus.OK:
            self.stats['parsed'] += 1
            return

        self.stats['failed'] += 1

        if is_syntax_error(status):
            name = 'SYNTAX_ERROR'
            position = error_position(status)
            # the offending character, when the text is still there to look at
            if text is not None and position <= len(text):
                char = text[position - 1]
                self.stats['bad_chars'][char] = self.stats['bad_chars'].get(char, 0) + 1
        else:
            name = ParseStatus(status).name

        self.stats['errors'][name] = self.stats['errors'].get(name, 0) + 1

    def get_summary(self):
        return {
            'total': self.stats['total'],
            'parsed': self.stats['parsed'],
            'failed': self.stats['failed'],
            'errors': dict(self.stats['errors']),
            'bad_chars': dict(self.stats['bad_chars']),
        }

    def reset(self):
        self.__init__()
