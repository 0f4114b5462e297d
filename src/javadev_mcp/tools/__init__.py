"""Tool collaborators — Spring Boot generators and Java source analysis."""
