"""ResumeRevamp: AI-assisted résumé extraction, editing, templating and export."""
