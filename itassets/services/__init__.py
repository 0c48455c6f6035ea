"""
Services Layer
Presentation-specific services and data getters used primarily in routes.

Services should:
- Not modify data models or business state
- Be presentation-focused - used primarily by routes
- Be stateless where possible
"""
