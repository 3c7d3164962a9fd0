# chatdocs/core/prompts.py
import jinja2
from pathlib import Path

# 📁 模板根目录（相对于当前文件）
TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

# 别名映射
ALIASES = {
    'suggest': 'suggest.md.j2',
    'update': 'update.md.j2',
}


class PromptBuilder:
    """用 Jinja2 模板组合两个阶段的提示词"""

    def __init__(self, templates_dir: Path = TEMPLATES_DIR):
        self.templates_dir = Path(templates_dir)
        self.env = self._create_jinja_env()

    def _create_jinja_env(self) -> jinja2.Environment:
        loader = jinja2.FileSystemLoader(str(self.templates_dir))
        return jinja2.Environment(loader=loader, autoescape=False, keep_trailing_newline=False)

    def _resolve_template_path(self, template: str) -> str:
        if template in ALIASES:
            template = ALIASES[template]
        if not template.endswith(('.j2', '.md')):
            template += '.j2'
        return template

    def render(self, template: str, **context) -> str:
        template_path = self._resolve_template_path(template)
        try:
            tmpl = self.env.get_template(template_path)
        except jinja2.TemplateNotFound:
            raise FileNotFoundError(f"Template not found: {template_path}")
        return tmpl.render(**context)

    def suggest_prompt(self, patch: str, documentation: str) -> str:
        return self.render('suggest', patch=patch, documentation=documentation)

    def update_prompt(self, documentation: str, suggestion: str) -> str:
        return self.render('update', documentation=documentation, suggestion=suggestion)
